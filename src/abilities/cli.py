"""Click CLI entrypoint — `abilities <subcommand>`.

Every call is stateless: the store is re-read each time. JSON output by
default, --human for key/value lines, --compact for agent context.
"""

from __future__ import annotations

import logging

import click

from abilities.errors import AbilityError
from abilities.output import output as _output


def _emit(ctx: click.Context, data: dict[str, object]) -> None:
    _output(data, ctx.obj["human"], ctx.obj["compact"])


@click.group()
@click.version_option(package_name="abilities-engine")
@click.option("--root", default=None, help="Ability store root directory")
@click.option("--human", is_flag=True, help="Human-readable output instead of JSON")
@click.option("--compact", is_flag=True, help="Concise text output for agent context injection")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
@click.pass_context
def cli(ctx: click.Context, root: str | None, human: bool, compact: bool, verbose: bool) -> None:
    """abilities — persona/rule/policy store and prompt resolver."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["root"] = root
    ctx.obj["human"] = human
    ctx.obj["compact"] = compact


@cli.command("list")
@click.option("--type", "doc_type", default="", help="persona|rule|policy|style|repo")
@click.option("--bodies", is_flag=True, help="Include document bodies")
@click.pass_context
def list_cmd(ctx: click.Context, doc_type: str, bodies: bool) -> None:
    """List ability documents, optionally one type folder only."""
    from abilities.service import list_documents
    try:
        docs = list_documents(doc_type or None, root=ctx.obj["root"])
    except AbilityError as e:
        _output({"error": str(e)})
        return
    _emit(ctx, {"documents": [d.to_dict(with_body=bodies) for d in docs]})


@cli.command()
@click.option("--persona", default="", help="Persona id or name (e.g. engineer)")
@click.option("--tag", "tags", multiple=True, help="Tag to match (repeatable)")
@click.option("--repo", "repo_id", default="", help="Repo id, name, or alias")
@click.option("--trace", is_flag=True, help="Include the resolution trace")
@click.option("--request", "request_file", default=None, type=click.Path(dir_okay=False),
              help="YAML request file; explicit options override it")
@click.option("--prompt-only", is_flag=True, help="Print only the rendered prompt")
@click.pass_context
def resolve(ctx: click.Context, persona: str, tags: tuple[str, ...], repo_id: str, trace: bool,
            request_file: str | None, prompt_only: bool) -> None:
    """Resolve a persona + tags (+ repo) into a deterministic prompt."""
    from abilities.resolve import ResolutionRequest, load_request
    from abilities.service import resolve_request
    try:
        base = load_request(request_file) if request_file else ResolutionRequest(persona="")
        request = ResolutionRequest.build(
            persona=persona or base.persona,
            tags=list(tags) or base.tags,
            repo_id=repo_id or base.repo_id,
            trace=trace or base.trace,
        )
        if not request.persona:
            _output({"error": "--persona is required (or a request file with persona)"})
            return
        result = resolve_request(request, root=ctx.obj["root"])
    except AbilityError as e:
        _output({"error": str(e)})
        return
    if prompt_only:
        click.echo(result.prompt)
        return
    _emit(ctx, result.to_dict())


@cli.command()
@click.option("--type", "doc_type", required=True, help="persona|rule|policy|style|repo")
@click.option("--id", "doc_id", required=True, help="Unique id (e.g. rule.backend.base)")
@click.option("--priority", default="100", help="Integer priority (higher wins)")
@click.option("--body", default="", help="Markdown body")
@click.option("--body-file", default=None, type=click.File("r"), help="Read the body from a file ('-' for stdin)")
@click.option("--tag", "tags", multiple=True)
@click.option("--alias", "aliases", multiple=True)
@click.option("--include", "includes", multiple=True)
@click.option("--name", default="")
@click.option("--dir", "relative_dir", default="", help="Subdirectory under the type folder")
@click.option("--file-name", default="", help="File name without .md (defaults from id)")
@click.option("--deprecated", is_flag=True)
@click.option("--supersedes", default="")
@click.option("--overwrite", is_flag=True)
@click.pass_context
def add(ctx: click.Context, doc_type: str, doc_id: str, priority: str, body: str, body_file, tags: tuple[str, ...],
        aliases: tuple[str, ...], includes: tuple[str, ...], name: str, relative_dir: str, file_name: str,
        deprecated: bool, supersedes: str, overwrite: bool) -> None:
    """Write a new ability document into the store."""
    from abilities.service import write_document
    if body_file is not None:
        body = body_file.read()
    try:
        doc = write_document(
            root=ctx.obj["root"],
            type=doc_type,
            id=doc_id,
            priority=priority,
            body=body,
            tags=list(tags),
            name=name,
            aliases=list(aliases),
            includes=list(includes),
            deprecated=deprecated,
            supersedes=supersedes,
            relative_dir=relative_dir,
            file_name=file_name,
            overwrite=overwrite,
        )
    except AbilityError as e:
        _output({"error": str(e)})
        return
    _emit(ctx, doc.to_dict())


@cli.command()
@click.pass_context
def summary(ctx: click.Context) -> None:
    """Document counts per type and the latest update time."""
    from abilities.service import store_summary
    _emit(ctx, store_summary(root=ctx.obj["root"]))


if __name__ == "__main__":
    cli()
