"""
Command-line interface for the UDIM makefile generator.
Provides commands to generate, inspect and configure manifest builds.
"""

import os
import logging
from pathlib import Path
from typing import Optional

import toml
import typer
from rich.console import Console
from rich.table import Table
from rich.markup import escape

from .config import GeneratorConfig, ENV_PREFIX
from .errors import UdimError
from .pipeline import UdimBuild, check_input, read_manifest_lines
from .parsing.manifest import parse_manifest
from .processing.makefile import MakefileGenerator

# Initialize typer app and rich console; stdout is reserved for the makefile
app = typer.Typer(
    name="udim-generator",
    help="UDIM Generator - Build makefile rules for texture mip generation from a manifest",
    add_completion=False,
    rich_markup_mode="rich",
    epilog="""
[bold]Examples:[/bold]
  [cyan]udim-generator generate -i textures.txt[/cyan]                Print makefile fragment
  [cyan]udim-generator generate -i textures.txt -o mips.mk[/cyan]     Write makefile fragment
  [cyan]udim-generator inspect -i textures.txt[/cyan]                 Show parsed textures

[bold]Environment Variables:[/bold]
  Use [cyan]udim-generator config --env-vars[/cyan] to see all available variables.
    """
)
console = Console(stderr=True, soft_wrap=True)


@app.command()
def generate(
    input_file: Path = typer.Option(..., "--input-file", "-i", metavar="FILEPATH", help="Texture manifest to read"),
    output_file: Optional[Path] = typer.Option(None, "--output-file", "-o", metavar="FILEPATH", help="Makefile fragment to write (stdout if omitted)"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    template_dir: Optional[Path] = typer.Option(None, "--templates", help="Directory with a makefile.mk.j2 template"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress details")
):
    """Generate makefile rules from a texture manifest."""
    console.print("[bold blue]Hello...you are running UDIMGenerator![/bold blue]")
    # Warnings are listed below, so the logger only reports them when verbose
    log_level = logging.INFO if verbose else logging.ERROR

    try:
        config = _load_config(config_file)
        _require_valid_config(config)
        generator = MakefileGenerator(config, template_dir=template_dir)

        build = UdimBuild.generate(input_file, config=config, generator=generator, log_level=log_level)
        console.print(f"[green]✓[/green] Parsed {len(build.records)} textures from {input_file}")

        if build.has_warnings:
            console.print(f"[yellow]Warning: {len(build.warnings)} manifest issues found:[/yellow]")
            for warning in build.warnings:
                console.print(f"  • {escape(str(warning))}")

        if output_file:
            console.print("[dim]User provided an output file so we are writing to it[/dim]")
            build.save(output_file)
            console.print(f"[green]✓[/green] Wrote makefile fragment: {output_file}")
        else:
            console.print("[dim]User didn't provide an output file so writing to stdout[/dim]")
            build.print()

    except typer.Exit:
        raise
    except UdimError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def inspect(
    input_file: Path = typer.Option(..., "--input-file", "-i", metavar="FILEPATH", help="Texture manifest to read"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path")
):
    """Show how each manifest line is parsed and which rule it produces."""
    try:
        config = _load_config(config_file)
        _require_valid_config(config)
        # Warnings are listed after the table
        logging.getLogger("udim_generator").setLevel(logging.ERROR)
        path = check_input(input_file)
        result = parse_manifest(read_manifest_lines(path))
        generator = MakefileGenerator(config)

        table = Table(title=f"Textures in {path.name}")
        table.add_column("Filename", style="cyan")
        table.add_column("Kind", style="magenta")
        table.add_column("Flags", style="white")
        table.add_column("Output", style="green")
        table.add_column("Priority", style="yellow")
        table.add_column("Options", style="white")

        for record, rule in zip(result.records, generator.build_rules(result.records)):
            table.add_row(
                record.filename,
                record.kind.value,
                " ".join(record.tokens) or "-",
                rule.output_name,
                str(rule.priority),
                rule.options.strip() or "-",
            )

        console.print(table)
        console.print(f"[green]✓[/green] {len(result.records)} textures")

        if result.has_warnings:
            console.print(f"[yellow]Warning: {len(result.warnings)} manifest issues found:[/yellow]")
            for warning in result.warnings:
                console.print(f"  • {escape(str(warning))}")

    except typer.Exit:
        raise
    except UdimError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    validate_config: bool = typer.Option(False, "--validate", help="Validate configuration file"),
    dump: bool = typer.Option(False, "--dump", help="Print configuration as TOML"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    env_vars: bool = typer.Option(False, "--env-vars", help="Show available environment variables")
):
    """Manage generator configuration."""
    try:
        if env_vars:
            _display_env_vars()
            return

        if show or validate_config or dump:
            config = _load_config(config_file)

            if show:
                _display_config(config)

            if dump:
                typer.echo(toml.dumps(config.to_dict()), nl=False)

            if validate_config:
                _require_valid_config(config)
                console.print("[green]✓ Configuration is valid[/green]")
        else:
            console.print("Use --show to display configuration, --validate to check it, --dump to print it as TOML, or --env-vars to see environment variables.")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error managing configuration:[/red] {e}")
        raise typer.Exit(1)


def _load_config(config_file: Optional[Path]) -> GeneratorConfig:
    """Load configuration from file or use defaults with environment variable support."""
    config = None

    if config_file:
        if not config_file.exists():
            console.print(f"[red]Configuration file not found:[/red] {config_file}")
            raise typer.Exit(1)
        config = GeneratorConfig.from_file(config_file)
        console.print(f"[dim]Using configuration: {config_file}[/dim]")
    else:
        # Try to find default config files
        default_configs = [
            Path("udim_generator.toml"),
            Path("udim_generator.json"),
        ]

        for config_path in default_configs:
            if config_path.exists():
                console.print(f"[dim]Using configuration: {config_path}[/dim]")
                config = GeneratorConfig.from_file(config_path)
                break

        if config is None:
            config = GeneratorConfig()

    # Apply environment variable overrides
    config = GeneratorConfig._apply_env_overrides(config)

    env_vars_used = [key for key in os.environ if key.startswith(ENV_PREFIX)]
    if env_vars_used:
        console.print(f"[dim]Environment overrides applied: {len(env_vars_used)} variables[/dim]")

    return config


def _require_valid_config(config: GeneratorConfig) -> None:
    """Stop the command when the loaded configuration does not validate."""
    errors = config.validate()
    if errors:
        console.print("[red]Configuration validation errors:[/red]")
        for error in errors:
            console.print(f"  • {error}")
        raise typer.Exit(1)


def _display_config(config: GeneratorConfig) -> None:
    """Display configuration in a formatted table."""
    table = Table(title="UDIM Generator Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    # Makefile layout
    table.add_row("Variable Name", config.variable_name)
    table.add_row("Pad Width", str(config.pad_width))
    table.add_row("Command", config.command)
    table.add_row("Tile", str(config.tile))
    table.add_row("Calibration", str(config.calibration))

    # Output naming
    table.add_row("UDIM Token", config.udim_token)
    table.add_row("UDIM Placeholder", config.udim_placeholder)
    table.add_row("Source Extension", config.source_extension)
    table.add_row("Output Extension", config.output_extension)

    # Priorities
    table.add_row("Default Priority", str(config.default_priority))
    table.add_row("AO Priority", str(config.ambient_occlusion_priority))
    table.add_row("Normal Priority", str(config.normal_priority))
    table.add_row("Specular Priority", str(config.specular_priority))

    table.add_row("Template Directory", config.template_dir or "(built-in)")

    console.print(table)


def _display_env_vars() -> None:
    """Display available environment variables for configuration."""
    table = Table(title="UDIM Generator Environment Variables")
    table.add_column("Environment Variable", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Example", style="green")

    env_vars = [
        ("UDIM_GENERATOR_VARIABLE_NAME", "Makefile variable listing the sources", "MIPS"),
        ("UDIM_GENERATOR_PAD_WIDTH", "Column width of the variable block", "50"),
        ("UDIM_GENERATOR_COMMAND", "Mip tool command", "$(MAKEMIP)"),
        ("UDIM_GENERATOR_TILE", "Pass -tile to the mip tool (true/false)", "true"),
        ("UDIM_GENERATOR_CALIBRATION", "Value passed to -cal", "1.0"),
        ("UDIM_GENERATOR_UDIM_TOKEN", "Tile number replaced in output names", "1001"),
        ("UDIM_GENERATOR_UDIM_PLACEHOLDER", "Replacement for the tile number", "UDIM"),
        ("UDIM_GENERATOR_SOURCE_EXTENSION", "Source texture extension", ".tga"),
        ("UDIM_GENERATOR_OUTPUT_EXTENSION", "Mip output extension", ".mip"),
        ("UDIM_GENERATOR_DEFAULT_PRIORITY", "Priority without priority flags", "0.1"),
        ("UDIM_GENERATOR_AO_PRIORITY", "Priority set by -ao", "0.9"),
        ("UDIM_GENERATOR_NORMAL_PRIORITY", "Priority set by -nrm", "0.7"),
        ("UDIM_GENERATOR_SPECULAR_PRIORITY", "Priority set by -spec", "0.1"),
        ("UDIM_GENERATOR_TEMPLATE_DIR", "Directory with a makefile.mk.j2 template", "templates"),
    ]

    for var_name, description, example in env_vars:
        table.add_row(var_name, description, example)

    console.print(table)
    console.print("\n[dim]Set these environment variables to override configuration file settings.[/dim]")
    console.print("[dim]Example: export UDIM_GENERATOR_PAD_WIDTH=60[/dim]")


if __name__ == "__main__":
    app()
