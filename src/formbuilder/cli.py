"""CLI main entry point."""

import logging
from pathlib import Path

import click

from .builder import FormSession
from .config import Settings
from .enums import FieldType, RenderMode
from .errors import FormBuilderException
from .log import setup as setup_log
from .registry import palette, type_of
from .storages import get_storage

logger = logging.getLogger(__name__)

FIELD_TYPE_CHOICES = [t.value for t in FieldType]


def _settings(ctx) -> Settings:
    return ctx.obj["settings"]


def _session(ctx, form_id: str | None = None) -> FormSession:
    settings = _settings(ctx)
    return FormSession(get_storage(settings=settings), settings.builder_options(), form_id)


@click.group()
@click.option("--config", "-c", default="config.toml", help="Configuration file path")
@click.pass_context
def cli(ctx, config: str):
    """Form builder - edit and render dynamic form definitions."""
    ctx.ensure_object(dict)
    try:
        settings = Settings.load(config)
    except FormBuilderException as e:
        raise click.ClickException(str(e))

    ctx.obj["config_path"] = config
    ctx.obj["settings"] = settings
    setup_log(settings.log_file)


@cli.command(name="types")
@click.pass_context
def list_types(ctx):
    """List the field types offered by the palette."""
    settings = _settings(ctx)
    click.echo("category\ttype\tlabel")
    for category, _heading, types in palette(allow_advanced=settings.builder.allow_advanced):
        for field_type in types:
            click.echo(f"{category.value}\t{field_type.value}\t{type_of(field_type).label}")


@cli.command(name="new")
@click.argument("name")
@click.option("--description", "-d", default="", help="Form description")
@click.pass_context
def new_form(ctx, name: str, description: str):
    """Create an empty form and print its id."""
    if not name.strip():
        raise click.ClickException("Please enter a form name")
    try:
        session = _session(ctx)
        session.builder.set_info(name=name.strip(), description=description)
        saved = session.commit()
    except FormBuilderException as e:
        raise click.ClickException(str(e))
    click.echo(saved.id)


@cli.command(name="list")
@click.pass_context
def list_forms(ctx):
    """List stored forms."""
    try:
        forms = get_storage(settings=_settings(ctx)).list_forms()
    except FormBuilderException as e:
        raise click.ClickException(str(e))

    click.echo("id\tfields\tname")
    for form in forms:
        click.echo(f"{form.id}\t{len(form.form_schema.properties)}\t{form.name}")


@cli.command(name="show")
@click.argument("form_id")
@click.pass_context
def show_form(ctx, form_id: str):
    """Print the fields of a form with their inferred types."""
    try:
        session = _session(ctx, form_id)
    except FormBuilderException as e:
        raise click.ClickException(str(e))

    builder = session.builder
    click.echo(f"{builder.definition.name} ({form_id})")
    click.echo("key\ttype\trequired\ttitle")
    for key, fragment in builder.definition.form_schema.properties.items():
        required = "yes" if builder.definition.is_required(key) else "no"
        click.echo(f"{key}\t{builder.infer_field_type(key).value}\t{required}\t{fragment.title or ''}")


@cli.command(name="add")
@click.argument("form_id")
@click.argument("field_type", type=click.Choice(FIELD_TYPE_CHOICES))
@click.option("--key", default=None, help="Explicit field key")
@click.pass_context
def add_field(ctx, form_id: str, field_type: str, key: str | None):
    """Append a new field and print its key."""
    try:
        session = _session(ctx, form_id)
        key = session.builder.add_field(field_type, key)
        session.commit()
    except FormBuilderException as e:
        raise click.ClickException(str(e))
    click.echo(key)


@cli.command(name="edit")
@click.argument("form_id")
@click.argument("key")
@click.option("--title", default=None)
@click.option("--description", default=None)
@click.option("--placeholder", default=None)
@click.option("--content", default=None, help="HTML block content")
@click.option("--min", "minimum", default=None, help="Minimum value")
@click.option("--max", "maximum", default=None, help="Maximum value")
@click.option("--options", default=None, help="Options, one per line or comma separated")
@click.option("--required/--optional", default=None)
@click.pass_context
def edit_field(ctx, form_id: str, key: str, options: str | None, **changes):
    """Edit the properties of a field."""
    mutations = {name: value for name, value in changes.items() if value is not None}
    if options is not None:
        mutations["enum"] = options if "\n" in options else options.replace(",", "\n")

    try:
        session = _session(ctx, form_id)
        if key not in session.builder.definition.form_schema.properties:
            raise click.ClickException(f"Field not found: {key}")
        session.builder.edit_field(key, mutations)
        session.commit()
    except FormBuilderException as e:
        raise click.ClickException(str(e))


@cli.command(name="duplicate")
@click.argument("form_id")
@click.argument("key")
@click.pass_context
def duplicate_field(ctx, form_id: str, key: str):
    """Copy a field to the end of the form and print the new key."""
    try:
        session = _session(ctx, form_id)
        new_key = session.builder.duplicate_field(key)
        if new_key is None:
            raise click.ClickException(f"Field not found: {key}")
        session.commit()
    except FormBuilderException as e:
        raise click.ClickException(str(e))
    click.echo(new_key)


@cli.command(name="delete")
@click.argument("form_id")
@click.argument("key")
@click.pass_context
def delete_field(ctx, form_id: str, key: str):
    """Remove a field from the form."""
    try:
        session = _session(ctx, form_id)
        session.builder.delete_field(key)
        session.commit()
    except FormBuilderException as e:
        raise click.ClickException(str(e))


@cli.command(name="render")
@click.argument("form_id")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in RenderMode]),
    default=RenderMode.PREVIEW.value,
    help="Inert builder preview or interactive live form",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None)
@click.pass_context
def render_form(ctx, form_id: str, mode: str, output: str | None):
    """Render a form as HTML."""
    try:
        session = _session(ctx, form_id)
    except FormBuilderException as e:
        raise click.ClickException(str(e))

    builder = session.builder
    if RenderMode(mode) == RenderMode.LIVE:
        html = builder.preview()
    else:
        html = builder.preview_renderer.render(builder.definition)

    if output:
        Path(output).write_text(html, encoding="utf-8")
        logger.info(f"Rendered {mode} form to {output}")
    else:
        click.echo(html)


@cli.command(name="serve")
@click.option("--host", "-h", default=None, help="Override host from config")
@click.option("--port", "-p", default=None, type=int, help="Override port from config")
@click.pass_context
def serve(ctx, host, port):
    """Start the HTTP API."""
    import uvicorn

    from .api import create_app

    settings = _settings(ctx)
    host = host or settings.web.host
    port = port or settings.web.port

    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run(create_app(settings), host=host, port=port)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
