"""Deploy a local directory of email templates to Zoho CRM."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses as dc
import typing as typ
from pathlib import Path

from courier.logging import configure_logging, get_logger, log_warning
from courier.sync.upsert import upsert_template
from courier.zoho import (
    ActivitySpec,
    ZohoAPIError,
    ZohoAuthError,
    ZohoClient,
    ZohoConfig,
    ZohoConfigError,
    ZohoTokenProvider,
)

from .naming import HTML_SUFFIX, build_artifact, derive_template_name

if typ.TYPE_CHECKING:
    from courier.sync.models import UpsertAction
    from courier.zoho import ActivityLog, TemplateStore

logger = get_logger(__name__)

DEFAULT_DIRECTORY = Path("email-templates/generated")


@dc.dataclass(frozen=True, slots=True)
class DeployResult:
    """Outcome of deploying one local template file."""

    path: Path
    template_name: str
    action: UpsertAction | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return whether Zoho accepted the template."""
        return self.error is None


def template_files(directory: Path) -> list[Path]:
    """Return the ``*.html`` files directly inside *directory*, sorted."""
    if not directory.is_dir():
        return []
    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and path.name.endswith(HTML_SUFFIX)
    )


async def deploy_directory(
    directory: Path,
    store: TemplateStore,
    *,
    activity_log: ActivityLog | None = None,
    project_id: str | None = None,
) -> list[DeployResult]:
    """Create or update a Zoho template for every file in *directory*.

    Raises
    ------
    ZohoAuthError
        If the token exchange fails.
    ZohoAPIError
        If Zoho cannot be reached.

    """
    results: list[DeployResult] = []
    for path in template_files(directory):
        try:
            raw = path.read_bytes()
        except OSError as exc:
            print(f"❌ Could not read {path}: {exc}")
            results.append(
                DeployResult(
                    path=path,
                    template_name=derive_template_name(path.name),
                    error=str(exc),
                )
            )
            continue
        artifact = build_artifact(path.as_posix(), raw)
        print(f"🔄 Deploying: {artifact.name}")
        outcome = await upsert_template(store, artifact)
        if not outcome.ok:
            print(f"❌ Failed to deploy {artifact.name}: {outcome.result.error}")
            results.append(
                DeployResult(
                    path=path,
                    template_name=artifact.name,
                    action=outcome.action,
                    error=outcome.result.error or "unknown error",
                )
            )
            continue

        print(f"✅ Successfully deployed ({outcome.action}): {artifact.name}")
        if activity_log is not None and project_id is not None:
            logged = await activity_log.log_activity(
                project_id,
                ActivitySpec(
                    title="Email Template Deployed",
                    description=(
                        f'Template "{artifact.name}" deployed to Zoho CRM '
                        f"from {path.name}"
                    ),
                ),
            )
            if not logged.ok:
                log_warning(
                    logger,
                    "Could not log deploy activity for %s: %s",
                    artifact.name,
                    logged.error,
                )
        results.append(
            DeployResult(path=path, template_name=artifact.name, action=outcome.action)
        )
    return results


async def _deploy(directory: Path, config: ZohoConfig) -> list[DeployResult]:
    tokens = ZohoTokenProvider(config)
    client = ZohoClient(config, tokens)
    try:
        return await deploy_directory(
            directory,
            client,
            activity_log=client,
            project_id=config.project_id,
        )
    finally:
        await client.aclose()
        await tokens.aclose()


def main(argv: list[str] | None = None) -> int:
    """Deploy every template in a directory using Zoho settings from the env.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 when every file deployed (or there was nothing to
        deploy), 1 otherwise.

    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=DEFAULT_DIRECTORY,
        help="Directory holding generated templates",
    )
    args = parser.parse_args(argv)
    directory: Path = args.directory

    files = template_files(directory)
    if not files:
        print(f"📭 No HTML templates found to deploy in {directory}")
        return 0

    print(f"📧 Found {len(files)} template(s) to deploy:")
    for path in files:
        print(f"  - {path.name}")

    try:
        config = ZohoConfig.from_env()
    except ZohoConfigError as exc:
        print(f"❌ {exc}")
        return 1

    configure_logging("WARNING")
    try:
        results = asyncio.run(_deploy(directory, config))
    except (ZohoAuthError, ZohoAPIError) as exc:
        print(f"❌ Deployment aborted: {exc}")
        return 1

    deployed = sum(1 for result in results if result.ok)
    print(f"\n🎉 Deployed {deployed}/{len(results)} template(s)")
    return 0 if deployed == len(results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
