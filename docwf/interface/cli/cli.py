import click
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from docwf.application.artifact_writer import ArtifactWriter
from docwf.application.config_loader import load_config
from docwf.application.config_models import AgentSettings
from docwf.domain.constants import DEFAULT_OUTPUT_DIR
from docwf.domain.events.emitter import WorkflowEventEmitter
from docwf.domain.events.event import WorkflowEvent
from docwf.domain.events.event_types import WorkflowEventType
from docwf.domain.models.role import RoleKey
from docwf.domain.profiles.catalog import DocumentProfileCatalog
from docwf.domain.roles.registry import RoleRegistry
from docwf.interface.cli.output_models import (
    ProfileSummary,
    ProfilesOutput,
    ProviderDetail,
    ProviderSummary,
    ProvidersOutput,
    RoleStatusSummary,
    RoleSummary,
    RolesOutput,
    RunOutput,
)

logger = logging.getLogger(__name__)


def _json_emit(model: BaseModel) -> None:
    # Single-line JSON, omit None fields (e.g., RunOutput.run_id on error).
    click.echo(model.model_dump_json(exclude_none=True), nl=True)


def _get_json_mode(ctx: click.Context) -> bool:
    obj = ctx.obj or {}
    return bool(obj.get("json", False))


def _load_settings() -> AgentSettings:
    cfg = load_config(project_root=Path.cwd(), user_home=Path.home())
    return AgentSettings.from_config(cfg)


def _load_catalog(settings: AgentSettings) -> DocumentProfileCatalog:
    catalog = DocumentProfileCatalog()
    if settings.profiles_dir:
        catalog.load_directory(Path(settings.profiles_dir).expanduser())
    return catalog


def _parse_role_pairs(values: tuple[str, ...], option: str) -> dict[RoleKey, str]:
    """Parse repeated ROLE=VALUE options into a mapping keyed by role."""
    parsed: dict[RoleKey, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected ROLE=VALUE, got: {item!r}", param_hint=option)
        try:
            parsed[RoleKey(key.strip())] = value
        except ValueError:
            available = ", ".join(k.value for k in RoleKey)
            raise click.BadParameter(
                f"unknown role {key.strip()!r}. Available roles: {available}",
                param_hint=option,
            )
    return parsed


def _apply_overrides(
    settings: AgentSettings,
    max_loops: tuple[str, ...],
    guidance: tuple[str, ...],
    provider: str | None,
    model: str | None,
) -> AgentSettings:
    """CLI options override config values."""
    update: dict[str, Any] = {}

    if max_loops:
        loops = dict(settings.max_loops)
        for key, raw in _parse_role_pairs(max_loops, "--max-loops").items():
            try:
                value = int(raw)
            except ValueError:
                raise click.BadParameter(f"not an integer: {raw!r}", param_hint="--max-loops")
            if value < 0:
                raise click.BadParameter("must be >= 0", param_hint="--max-loops")
            loops[key] = value
        update["max_loops"] = loops

    if guidance:
        update["reviewer_guidance"] = {
            **settings.reviewer_guidance,
            **_parse_role_pairs(guidance, "--guidance"),
        }

    if provider or model:
        provider_settings = settings.provider
        if provider and provider != provider_settings.type:
            # Switching provider drops the configured provider's keys
            provider_settings = type(provider_settings)(type=provider)
        if model:
            provider_settings = provider_settings.model_copy(update={"model": model})
        update["provider"] = provider_settings

    return settings.model_copy(update=update) if update else settings


class _LogEchoObserver:
    """Echoes run log entries to stderr as they are appended."""

    def on_event(self, event: WorkflowEvent) -> None:
        severity = event.metadata.get("severity", "info")
        role = f"[{event.role.value}] " if event.role else ""
        click.echo(f"{severity.upper():<12} {role}{event.message}", err=True)


@click.group(help="Multi-role technical document revision workflow.")
@click.option("--json", "json_output", is_flag=True, help="Emit machine-readable JSON on stdout.")
@click.pass_context
def cli(ctx: click.Context, json_output: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj["json"] = bool(json_output)


@cli.command("run")
@click.option("--profile", "profile_id", required=False, type=str, help="Document profile id (defaults to config 'profile').")
@click.option(
    "--source",
    "source_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Primary source content (existing draft, notes, etc.).",
)
@click.option(
    "--supporting",
    "supporting_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Authoritative supporting content, e.g. source code.",
)
@click.option(
    "--output-dir",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT_DIR,
    show_default=True,
)
@click.option("--max-loops", "max_loops", multiple=True, metavar="ROLE=N", help="Reviewer loop bound override.")
@click.option("--guidance", "guidance", multiple=True, metavar="ROLE=TEXT", help="Custom reviewer guidance.")
@click.option("--provider", "provider_key", required=False, type=str, help="Provider key (overrides config).")
@click.option("--model", "model", required=False, type=str, help="Model name (overrides config).")
@click.option("--events", is_flag=True, help="Emit workflow events to stderr.")
@click.pass_context
def run_cmd(
    ctx: click.Context,
    profile_id: str | None,
    source_file: Path,
    supporting_file: Path | None,
    output_dir: Path,
    max_loops: tuple[str, ...],
    guidance: tuple[str, ...],
    provider_key: str | None,
    model: str | None,
    events: bool,
) -> None:
    """Draft a document and run it past every reviewer."""
    try:
        from docwf.application.workflow_engine import WorkflowEngine
        from docwf.domain.providers import ProviderFactory

        settings = _apply_overrides(_load_settings(), max_loops, guidance, provider_key, model)
        catalog = _load_catalog(settings)

        run_config = settings.to_run_config(
            profile_id=profile_id,
            source_content=source_file.read_text(encoding="utf-8"),
            supporting_content=(
                supporting_file.read_text(encoding="utf-8") if supporting_file else ""
            ),
        )

        key, provider_config = settings.resolve_provider()
        provider = ProviderFactory.create(key, provider_config)
        provider.validate()

        event_emitter = WorkflowEventEmitter()
        if not _get_json_mode(ctx):
            event_emitter.subscribe(_LogEchoObserver(), [WorkflowEventType.LOG_APPENDED])
        if events:
            from docwf.domain.events.stderr_observer import StderrEventObserver
            event_emitter.subscribe(StderrEventObserver())

        engine = WorkflowEngine(provider=provider, profiles=catalog, event_emitter=event_emitter)
        outcome = engine.run(run_config)

        written = ArtifactWriter().write(engine.results, output_dir)
        document_path = next((p for p in written if p.suffix == ".md"), None)
        feedback_path = next((p for p in written if p.suffix == ".txt"), None)

        exit_code = 0 if outcome.succeeded else 1

        if _get_json_mode(ctx):
            roles = [
                RoleStatusSummary(
                    key=state.role.key.value,
                    name=state.role.name,
                    status=state.status.value,
                    loop_count=state.loop_count,
                    max_loops=state.max_loops,
                    error=state.error,
                )
                for state in engine.runtime_states().values()
            ]
            _json_emit(
                RunOutput(
                    exit_code=exit_code,
                    error=outcome.error,
                    run_id=outcome.run_id,
                    status=outcome.status.value,
                    final_document_path=str(document_path) if document_path else None,
                    feedback_log_path=str(feedback_path) if feedback_path else None,
                    writer_calls=outcome.writer_calls,
                    review_calls=outcome.review_calls,
                    roles=roles,
                )
            )
            raise click.exceptions.Exit(exit_code)

        if not outcome.succeeded:
            raise click.ClickException(outcome.error or "Workflow failed")

        click.echo(str(document_path))
        if feedback_path:
            click.echo(f"Review feedback log: {feedback_path}", err=True)

    except click.exceptions.Exit:
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(
                RunOutput(
                    exit_code=1,
                    error=str(e),
                )
            )
            raise click.exceptions.Exit(1)
        if isinstance(e, click.ClickException):
            raise
        raise click.ClickException(str(e)) from e


@cli.command("profiles")
@click.pass_context
def profiles_cmd(ctx: click.Context) -> None:
    """List available document profiles."""
    try:
        catalog = _load_catalog(_load_settings())
        profiles_list = [
            ProfileSummary(id=p.id, name=p.name, description=p.description)
            for p in catalog.list_profiles()
        ]

        if _get_json_mode(ctx):
            _json_emit(ProfilesOutput(exit_code=0, profiles=profiles_list))
            raise click.exceptions.Exit(0)

        click.echo(f"{'PROFILE':<32}{'NAME':<24}{'DESCRIPTION'}")
        for p in profiles_list:
            click.echo(f"{p.id:<32}{p.name:<24}{p.description}")

    except click.exceptions.Exit:
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(ProfilesOutput(exit_code=1, error=str(e)))
            raise click.exceptions.Exit(1)
        raise click.ClickException(str(e)) from e


@cli.command("roles")
@click.pass_context
def roles_cmd(ctx: click.Context) -> None:
    """List roles in review order with their effective loop bounds."""
    try:
        settings = _load_settings()
        roles_list = [
            RoleSummary(
                key=role.key.value,
                name=role.name,
                category=role.category.value,
                description=role.description,
                max_loops=settings.max_loops.get(role.key, role.default_max_loops)
                if role.is_reviewer
                else None,
            )
            for role in RoleRegistry().list_roles()
        ]

        if _get_json_mode(ctx):
            _json_emit(RolesOutput(exit_code=0, roles=roles_list))
            raise click.exceptions.Exit(0)

        click.echo(f"{'ROLE':<24}{'CATEGORY':<10}{'LOOPS':<7}{'DESCRIPTION'}")
        for r in roles_list:
            loops = "-" if r.max_loops is None else str(r.max_loops)
            click.echo(f"{r.key:<24}{r.category:<10}{loops:<7}{r.description}")

    except click.exceptions.Exit:
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(RolesOutput(exit_code=1, error=str(e)))
            raise click.exceptions.Exit(1)
        raise click.ClickException(str(e)) from e


@cli.command("providers")
@click.argument("provider_name", type=str, required=False)
@click.pass_context
def providers_cmd(ctx: click.Context, provider_name: str | None) -> None:
    """List available LLM providers or show details for a specific provider."""
    try:
        # Import providers to ensure registration
        from docwf.domain.providers import ProviderFactory

        if provider_name:
            metadata = ProviderFactory.get_metadata(provider_name)
            if metadata is None:
                available = ", ".join(ProviderFactory.list_providers())
                raise click.ClickException(
                    f"Provider '{provider_name}' not found. Available: {available}"
                )

            provider_detail = ProviderDetail(
                name=metadata["name"],
                description=metadata["description"],
                requires_config=metadata.get("requires_config", False),
                config_keys=metadata.get("config_keys", []),
                default_model=metadata.get("default_model"),
            )

            if _get_json_mode(ctx):
                _json_emit(ProvidersOutput(exit_code=0, provider=provider_detail))
                raise click.exceptions.Exit(0)

            click.echo(f"Provider: {provider_detail.name}")
            click.echo(f"Description: {provider_detail.description}")
            requires_str = "yes" if provider_detail.requires_config else "no"
            click.echo(f"Requires Config: {requires_str}")
            if provider_detail.config_keys:
                click.echo(f"Config Keys: {', '.join(provider_detail.config_keys)}")

        else:
            providers_list = [
                ProviderSummary(
                    name=m["name"],
                    description=m["description"],
                    requires_config=m.get("requires_config", False),
                )
                for m in ProviderFactory.get_all_metadata()
            ]

            if _get_json_mode(ctx):
                _json_emit(ProvidersOutput(exit_code=0, providers=providers_list))
                raise click.exceptions.Exit(0)

            click.echo(f"{'PROVIDER':<14}{'DESCRIPTION':<40}{'CONFIG'}")
            for p in providers_list:
                config_str = "required" if p.requires_config else "none"
                click.echo(f"{p.name:<14}{p.description:<40}{config_str}")

    except click.exceptions.Exit:
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(ProvidersOutput(exit_code=1, error=str(e)))
            raise click.exceptions.Exit(1)
        if isinstance(e, click.ClickException):
            raise
        raise click.ClickException(str(e)) from e
