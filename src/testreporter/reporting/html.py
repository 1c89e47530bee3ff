"""XHTML table rendering of result records."""
from __future__ import annotations

import re
from collections import Counter
from typing import Sequence

from jinja2 import DictLoader, Environment, select_autoescape

from testreporter.core.models import ResultRecord

from .formatting import format_timestamp

ENCODING = "UTF-8"

# Characters outside the XML 1.0 Char production.
_XML_ILLEGAL = re.compile("[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")

REPORT_TEMPLATE = """\
<?xml version="1.0" encoding="{{ encoding }}"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml">
<head>
<meta charset="{{ encoding }}"/>
<title>Test results{% if run_timestamp %} {{ run_timestamp }}{% endif %}</title>
<style type="text/css">
table {border-collapse: collapse; font-family: sans-serif; font-size: small;}
th, td {border: 1px solid #ccc; padding: 2px 6px; vertical-align: top;}
td.duration {text-align: right;}
tr.SUCCESS td.status {color: #2a7b2a;}
tr.FAILURE td.status, tr.ERROR td.status {color: #b00020;}
pre {margin: 0;}
</style>
</head>
<body>
<h1>Test results</h1>
<p class="summary">total={{ records|length }}{% for status, count in counts %} {{ status|lower|xml_chars }}={{ count }}{% endfor %}</p>
<table>
<thead>
<tr><th>Status</th><th>Duration (s)</th><th>Raw duration (s)</th><th>Suite</th><th>Test</th><th>Error</th><th>Stack trace</th></tr>
</thead>
<tbody>
{% for record in records %}
<tr class="{{ record.status|xml_chars }}">
<td class="status">{{ record.status|xml_chars }}</td>
<td class="duration">{{ "%.3f"|format(record.duration_s) }}</td>
<td class="duration">{{ "%.3f"|format(record.raw_duration_s) }}</td>
<td>{{ record.class_name|xml_chars }}</td>
<td>{{ record.test_name|xml_chars }}</td>
<td>{{ record.error_message|xml_chars }}</td>
<td>{% if record.stack_trace %}<pre>{{ record.stack_trace|xml_chars }}</pre>{% endif %}</td>
</tr>
{% endfor %}
</tbody>
</table>
</body>
</html>
"""

_environment = Environment(
    loader=DictLoader({"report.html": REPORT_TEMPLATE}),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def xml_chars(value: str) -> str:
    """Replace characters XML cannot carry with a visible \\xNN escape."""

    return _XML_ILLEGAL.sub(lambda match: f"\\x{ord(match.group()):02x}", value)


_environment.filters["xml_chars"] = xml_chars


def render_html(records: Sequence[ResultRecord]) -> bytes:
    counts = Counter(record.status for record in records)
    template = _environment.get_template("report.html")
    document = template.render(
        encoding=ENCODING,
        records=records,
        counts=sorted(counts.items()),
        run_timestamp=format_timestamp(records[0].timestamp) if records else "",
    )
    return document.encode(ENCODING)
