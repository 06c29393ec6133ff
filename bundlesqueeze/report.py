"""Report writer - the JSON asset plus an HTML report with the data inlined.

The HTML report is self-contained: the module list sits in a JSON script
element (read back by ingest.extract_inlined_json) and a static summary of
entry points is rendered next to it.
"""

import html
import json
import re
from pathlib import Path

from bundlesqueeze.graph import ModuleGraph, ModuleRecord, SizeAttributor, SizeTree, format_size
from bundlesqueeze.utils.constants import DATA_ELEMENT_ID, DATA_JSON_NAME, REPORT_HTML_NAME
from bundlesqueeze.utils.helpers import save_json_file
from bundlesqueeze.utils.logging import logger

DATA_PLACEHOLDER = "__BUNDLE_SQUEEZE_DATA__"
SUMMARY_PLACEHOLDER = "__BUNDLE_SQUEEZE_SUMMARY__"
ELEMENT_ID_PLACEHOLDER = "__BUNDLE_SQUEEZE_ELEMENT_ID__"
_PLACEHOLDER_RE = re.compile(
    "|".join(re.escape(p) for p in (DATA_PLACEHOLDER, SUMMARY_PLACEHOLDER, ELEMENT_ID_PLACEHOLDER))
)

HTML_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Bundle squeeze</title>
<style>
body { font-family: system-ui, sans-serif; margin: 2rem; }
table { border-collapse: collapse; }
td, th { padding: 0.2rem 0.8rem; text-align: right; }
td:first-child, th:first-child { text-align: left; font-family: monospace; }
</style>
</head>
<body>
<h1>Entry points</h1>
__BUNDLE_SQUEEZE_SUMMARY__
<script type="application/json" id="__BUNDLE_SQUEEZE_ELEMENT_ID__">__BUNDLE_SQUEEZE_DATA__</script>
</body>
</html>
"""


def inline_json(records: list[ModuleRecord]) -> str:
    """Serialize records for embedding inside a script element."""
    payload = json.dumps([r.to_dict() for r in records])
    # "</script" inside the payload would close the element early
    return payload.replace("</", "<\\/")


def render_summary(records: list[ModuleRecord]) -> str:
    tree = SizeTree(SizeAttributor(ModuleGraph(records)))
    rows = []
    for entry in tree.ranked_entry_points():
        rows.append(
            "<tr><td>{id}</td><td>{self}</td><td>{total}</td></tr>".format(
                id=html.escape(entry.id),
                self=format_size(entry.self_size),
                total=format_size(tree.attributor.total(entry)),
            )
        )
    header = "<tr><th>Module</th><th>Self</th><th>Total</th></tr>"
    return "<table>\n" + header + "\n" + "\n".join(rows) + "\n</table>"


def render_html(records: list[ModuleRecord]) -> str:
    slots = {
        ELEMENT_ID_PLACEHOLDER: DATA_ELEMENT_ID,
        SUMMARY_PLACEHOLDER: render_summary(records),
        DATA_PLACEHOLDER: inline_json(records),
    }
    # Single pass: placeholder text inside module ids is never substituted
    return _PLACEHOLDER_RE.sub(lambda m: slots[m.group(0)], HTML_TEMPLATE)


def write_report(records: list[ModuleRecord], out_dir: str | Path) -> dict[str, Path]:
    """Write the JSON asset and the HTML report into out_dir.

    Returns:
        Mapping of "json" and "html" to the written paths
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    json_path = out / DATA_JSON_NAME
    logger.info(f"Writing {json_path.name} ({len(records)} modules)...")
    save_json_file([r.to_dict() for r in records], json_path)

    html_path = out / REPORT_HTML_NAME
    logger.info(f"Writing {html_path.name}...")
    html_path.write_text(render_html(records), encoding="utf-8")

    return {"json": json_path, "html": html_path}
