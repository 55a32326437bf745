"""Clean generated HTML email templates for Zoho CRM on disk."""

from __future__ import annotations

import argparse
import dataclasses as dc
from pathlib import Path

from .naming import HTML_SUFFIX
from .sanitizer import sanitize

FORMATTED_SUFFIX = "-zoho.html"


@dc.dataclass(frozen=True, slots=True)
class FormatResult:
    """Outcome of formatting one file."""

    source: Path
    output: Path | None = None
    warnings: tuple[str, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return whether the file was written."""
        return self.error is None


def default_output_path(source: Path) -> Path:
    """Return ``<stem>-zoho.html`` next to *source*."""
    return source.with_name(f"{source.stem}{FORMATTED_SUFFIX}")


def format_file(source: Path, output: Path | None = None) -> FormatResult:
    """Sanitise *source* and write the result to *output*.

    Read and write failures are reported in the result rather than raised.
    """
    target = output or default_output_path(source)
    try:
        sanitized = sanitize(source.read_text(encoding="utf-8"))
        target.write_text(sanitized.html, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return FormatResult(source=source, error=str(exc))
    return FormatResult(source=source, output=target, warnings=sanitized.warnings)


def format_directory(directory: Path) -> list[FormatResult]:
    """Format every ``*.html`` in *directory* that is not already formatted."""
    sources = sorted(
        path
        for path in directory.iterdir()
        if path.is_file()
        and path.name.endswith(HTML_SUFFIX)
        and not path.name.endswith(FORMATTED_SUFFIX)
    )
    print(f"🔄 Processing {len(sources)} HTML files in {directory}")
    results = [_report(format_file(source)) for source in sources]
    succeeded = sum(1 for result in results if result.ok)
    print(f"\n✨ Complete! {succeeded}/{len(results)} files processed successfully.")
    return results


def _report(result: FormatResult) -> FormatResult:
    if not result.ok:
        print(f"❌ Error processing {result.source}: {result.error}")
        return result
    print(f"✅ Processed: {result.source.name}")
    print(f"📁 Output: {result.output}")
    if result.warnings:
        print("⚠️  Warnings:")
        for warning in result.warnings:
            print(f"   - {warning}")
    return result


def main(argv: list[str] | None = None) -> int:
    """Format a template file or a directory of templates.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 when every file was written, 1 otherwise.

    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("input", type=Path, help="HTML file or directory")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=None,
        help="Output file when formatting a single file",
    )
    args = parser.parse_args(argv)

    source: Path = args.input
    if source.is_dir():
        results = format_directory(source)
    elif source.is_file():
        results = [_report(format_file(source, args.output))]
    else:
        print(f"❌ Input must be a file or directory: {source}")
        return 1

    return 0 if all(result.ok for result in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
