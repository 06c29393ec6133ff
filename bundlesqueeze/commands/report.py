"""Write the JSON asset and HTML report for a module list."""

import click

from bundlesqueeze.config_runtime import load_runtime_config
from bundlesqueeze.ingest import load_records, resolve_sources
from bundlesqueeze.pipeline.ui import print_success
from bundlesqueeze.report import write_report
from bundlesqueeze.utils.error_handler import handle_exceptions


@click.command()
@click.argument("source")
@click.option("--out", default=None, help="Output directory (default: paths.report_dir)")
@click.option("--root", default=".", help="Project root holding .squeeze/config.json")
@click.help_option("-h", "--help")
@handle_exceptions
def report(source, out, root):
    """Emit bundle-analyzer.json and bundle-squeeze.html.

    SOURCE is any supported module list: the build hook's JSON, a
    previously written report, or dependency-cruiser JSON output.

    Examples:
      squeeze report depcruise.json --out dist/
      squeeze report dist/bundle-squeeze.html --out /tmp/report
    """
    config = load_runtime_config(root)
    json_path, html_path = resolve_sources(source)
    records = load_records(json_path, html_path)

    written = write_report(records, out or config["paths"]["report_dir"])
    print_success(f"{len(records)} modules written to {written['json']} and {written['html']}")
