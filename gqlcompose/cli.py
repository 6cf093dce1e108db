"""gqlcompose CLI - compose a directory of SDL documents into one schema."""

import sys
from pathlib import Path

import click

from gqlcompose import __version__
from gqlcompose.config import load_runtime_config
from gqlcompose.pipeline import BuildResult, run_build
from gqlcompose.ui import print_failure_panel, print_header, print_merge_order, print_success
from gqlcompose.utils.error_handler import handle_exceptions
from gqlcompose.utils.exit_codes import ExitCodes
from gqlcompose.utils.logging import set_level


def report(result: BuildResult) -> None:
    """Print the outcome of one build pass on the console."""
    if result.success:
        print_merge_order(result.order)
        print_success(
            f"Composed {len(result.order)} document(s), {result.type_count} type(s) "
            f"into {result.output_path} in {result.duration:.2f}s"
        )
        return

    print_failure_panel(type(result.error).__name__, result.messages)


@click.command("gqlcompose", context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-v", "--version", prog_name="gqlcompose")
@click.option(
    "-s", "--source",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Source directory, scanned recursively for .graphql/.gql documents.",
)
@click.option(
    "-o", "--output",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output filename for the composed schema.",
)
@click.option("-w", "--watch", "watch_mode", is_flag=True, help="Watch for changes and re-build.")
@click.option("--verbose", is_flag=True, help="Log dependency edges and other debug detail.")
@handle_exceptions
def main(source: Path, output: Path, watch_mode: bool, verbose: bool) -> None:
    """Compose modular GraphQL SDL documents into one validated schema.

    Every document under SOURCE is parsed; the order in which documents are
    merged is inferred from what each one extends and references, so no
    import statements are needed. The merged schema is validated and, only
    if valid, printed to OUTPUT.

    \b
    EXAMPLES:
      gqlcompose -s schema/ -o build/schema.graphql
      gqlcompose -s schema/ -o build/schema.graphql --watch

    \b
    EXIT CODES:
      0  Schema composed and written
      1  Build failed (parse, cycle, assembly or validation error)
      2  Invalid command line usage
    """
    if verbose:
        set_level("DEBUG")

    config = load_runtime_config()

    if not watch_mode:
        result = run_build(source, output, config)
        report(result)
        sys.exit(ExitCodes.SUCCESS if result.success else ExitCodes.BUILD_FAILED)

    from gqlcompose.watcher import watch

    def rebuild() -> BuildResult:
        print_header("BUILD")
        rebuilt = run_build(source, output, config)
        report(rebuilt)
        return rebuilt

    # The first build runs inside the watcher once it is observing the tree
    last = watch(
        source,
        output,
        rebuild,
        debounce_seconds=config["watch"]["debounce_seconds"],
        extensions=config["discovery"]["extensions"],
    )
    sys.exit(ExitCodes.SUCCESS if last is not None and last.success else ExitCodes.BUILD_FAILED)


if __name__ == "__main__":
    main()
