"""Canned Kroki responses shared by the test modules."""

DECODE_ERROR_PAGE = b"""<html>
<head><title>Unable to decode</title></head>
<body>
<h1>Unable to decode the diagram source</h1>
<pre>Incorrect header check at position 0</pre>
</body>
</html>"""

NOT_FOUND_PAGE = b"""<!DOCTYPE html>
<html lang="en">
<head><title>404 Not Found</title></head>
<body><p>The requested diagram type is not available.</p></body>
</html>"""

PLAIN_SVG = (
    b'<?xml version="1.0" encoding="UTF-8"?>'
    b'<svg xmlns="http://www.w3.org/2000/svg" width="100px" height="50px" viewBox="0 0 100 50">'
    b'<rect stroke-width="2" width="10" height="10"/><text x="5" y="20">A</text></svg>'
)

INLINE_ERROR_SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg" width="300" height="40">'
    b'<text class="error" x="0" y="20"> bad syntax </text></svg>'
)

RED_FILL_SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg" width="300" height="60">'
    b'<text fill="#FF0000" x="0" y="20">Parse error on line 2:<br/>A --&gt; &amp;B</text></svg>'
)

XHTML_DECODE_ERROR_PAGE = b"""<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" "http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>Unable to decode</title></head>
<body><pre>Incorrect header check</pre></body>
</html>"""

PLAIN_DECODE_ERROR = b"Error 400: Unable to decode the diagram source: incorrect header check"
