import pytest


GALLERY_HTML = """
<html><head><title>Summer Gallery</title></head>
<body>
  <div class="gallery wide">
    <img class="thumb" srcset="s.jpg 100w, l.jpg 800w, m.jpg 400w" src="fallback.jpg">
    <img class="thumb" src="/only-src.jpg">
  </div>
  <div class="footer"><img class="logo" src="logo.png" alt=""></div>
</body></html>
"""


@pytest.fixture
def gallery_html():
    return GALLERY_HTML


@pytest.fixture
def gallery_file(tmp_path):
    path = tmp_path / "gallery.html"
    path.write_text(GALLERY_HTML, encoding="utf-8")
    return path
