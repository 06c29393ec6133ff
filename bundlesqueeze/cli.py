"""bundlesqueeze CLI - main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click

from bundlesqueeze import __version__
from bundlesqueeze.utils.constants import SQUEEZE_DIR
from bundlesqueeze.utils.logging import configure_file_logging, logger


@click.group()
@click.version_option(version=__version__, prog_name="squeeze")
@click.option("--debug-log", is_flag=True, help="Write a DEBUG log to .squeeze/bundlesqueeze.log")
@click.help_option("-h", "--help")
@click.pass_context
def cli(ctx, debug_log):
    """Explain where the bytes in a compiled bundle come from.

    Reads the module list written by the build hook (bundle-analyzer.json,
    or the data inlined in bundle-squeeze.html) and attributes sizes across
    the import graph.

    \b
    SIZES:
      self     the module's own bytes (minified when known)
      total    self plus every static dependency, each counted once
      unique   bytes only reachable through one specific import route
      removed  bytes that disappear if the module is deleted

    \b
    QUICK START:
      squeeze entries dist/            # Entry points by total size
      squeeze tree dist/ --depth 3     # Where the bytes come from
      squeeze module ID dist/          # What one module costs
    """
    if debug_log:
        handler_id = configure_file_logging(SQUEEZE_DIR)
        ctx.call_on_close(lambda: logger.remove(handler_id))


from bundlesqueeze.commands.entries import entries
from bundlesqueeze.commands.module import module
from bundlesqueeze.commands.report import report
from bundlesqueeze.commands.tree import tree_command

cli.add_command(entries)
cli.add_command(module)
cli.add_command(report)
cli.add_command(tree_command)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
