import os
import tempfile

# Keep test log files out of the working tree
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "koeri_quake_test_logs"))

import pytest
import requests

SAMPLE_LINE = "2024.03.15 14:23:11 38.4521 27.1234 7.3 -.- 3.2 -.- SOME PLACE NAME  C"

SAMPLE_REPORT = """<HTML><HEAD><TITLE>Son Depremler</TITLE></HEAD>
<BODY>
<pre>
B.U. KANDILLI RASATHANESI ve DAE.
BOLGESEL DEPREM-TSUNAMI IZLEME ve DEGERLENDIRME MERKEZI
TURKIYE VE YAKIN CEVRESINDEKI SON DEPREMLER

Tarih      Saat      Enlem(N)  Boylam(E) Derinlik(km)  MD   ML   Mw    Yer                                             Çözüm Niteliği
---------- --------  --------  -------   ----------    ------------    --------------                                  --------------
2024.03.15 14:23:11  38.4521   27.1234        7.3      -.-  3.2  -.-   SOME PLACE NAME                                   İlksel
2024.03.15 13:58:40  37.2210   36.8810        9.8      -.-  2.1  -.-   NURDAGI (GAZIANTEP)                               İlksel
2024.03.15 12:05:09  39.1801   28.1690       11.2      -.-  4.4  4.3   SINDIRGI (BALIKESIR)   (14:00:00)                 REVIZE01
</pre>
</BODY></HTML>
"""


@pytest.fixture
def make_response():
    """Build real requests.Response objects without touching the network."""

    def _make(url, body="", status=200, content_type="text/html; charset=utf-8"):
        response = requests.Response()
        response.status_code = status
        response._content = body.encode("utf-8")
        response.url = url
        if content_type:
            response.headers["Content-Type"] = content_type
            if "charset=" in content_type:
                response.encoding = content_type.split("charset=", 1)[1]
        return response

    return _make


@pytest.fixture
def sample_report():
    return SAMPLE_REPORT
