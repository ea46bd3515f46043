"""
Makefile fragment generation for UDIM mip builds.

The fragment has two blocks: a variable listing every source texture and one
rule per texture that runs the mip tool with a priority and per-type options.
"""

import logging
from dataclasses import dataclass, replace
from functools import reduce
from pathlib import Path
from typing import List, Optional, Sequence, Union

from jinja2 import Environment, FileSystemLoader, BaseLoader, TemplateNotFound

from ..config import GeneratorConfig
from ..parsing.flags import ProcessFlag
from ..parsing.manifest import TextureRecord

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "makefile.mk.j2"

# Rendered with trim_blocks, so the newline after each block tag is dropped.
BUILTIN_TEMPLATE = (
    "{{ variable_name }} = \n"
    "{% for record in records %}\n"
    "\t{{ record.filename | pad(pad_width) }}\\\n"
    "{% endfor %}\n"
    "\n"
    "##### MIP Commands Below for {{ records | length }} Textures #####\n"
    "{% for rule in rules %}\n"
    "{{ rule.output_name }} : {{ rule.filename }}\n"
    "\t{{ rule.command_line }}\n"
    "{% endfor %}\n"
)


@dataclass(frozen=True)
class MipOptions:
    """Accumulated mip tool settings for one texture."""
    priority: float
    options: str = ""


@dataclass(frozen=True)
class MipRule:
    """One makefile rule: output target, source dependency and command."""
    filename: str
    output_name: str
    priority: float
    options: str
    command_line: str


def pad(value: str, width: int = 50) -> str:
    """Left-justify a value to the given column width."""
    return f"{value:<{width}}"


class MakefileGenerator:
    """Generates makefile fragments from parsed texture records."""

    def __init__(self, config: Optional[GeneratorConfig] = None,
                 template_dir: Optional[Union[str, Path]] = None):
        """
        Initialize makefile generator.

        Args:
            config: Generator configuration, defaults when omitted
            template_dir: Directory holding a makefile.mk.j2 override
        """
        self.config = config or GeneratorConfig()

        if template_dir is None and self.config.template_dir:
            template_dir = self.config.template_dir
        self.template_dir = Path(template_dir) if template_dir else None

        loader = FileSystemLoader(str(self.template_dir)) if self.template_dir else BaseLoader()
        self.env = Environment(
            loader=loader,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False
        )
        self.env.filters['pad'] = pad

    def output_name(self, filename: str) -> str:
        """Build the UDIM mip target name for a source texture."""
        return (
            filename
            .replace(self.config.udim_token, self.config.udim_placeholder)
            .replace(self.config.source_extension, self.config.output_extension)
        )

    def apply_flag(self, state: MipOptions, flag: ProcessFlag) -> MipOptions:
        """Fold a single flag into the accumulated settings."""
        if flag is ProcessFlag.AMBIENT_OCCLUSION:
            return replace(state, priority=self.config.ambient_occlusion_priority)
        if flag is ProcessFlag.SPECULAR:
            return MipOptions(self.config.specular_priority, state.options + "-specmap ")
        if flag is ProcessFlag.NORMAL:
            return MipOptions(self.config.normal_priority, state.options + "-normalmap ")
        if flag is ProcessFlag.HIGH_PRECISION:
            return replace(state, options=state.options + "-highprec ")

        logger.warning("Unexpected flag detected")
        return state

    def fold_flags(self, flags: Sequence[ProcessFlag]) -> MipOptions:
        """
        Reduce a flag sequence to a priority and option string.

        Flags are applied left to right, so the last priority-setting flag wins.
        """
        return reduce(self.apply_flag, flags, MipOptions(self.config.default_priority))

    def build_rule(self, record: TextureRecord) -> MipRule:
        """Build the makefile rule for one texture record."""
        settings = self.fold_flags(record.flags)

        parts = [self.config.command, record.filename]
        if self.config.tile:
            parts.append("-tile")
        parts.extend(["-priority", str(settings.priority), "-cal", str(self.config.calibration)])
        command_line = " ".join(parts) + " " + settings.options

        return MipRule(
            filename=record.filename,
            output_name=self.output_name(record.filename),
            priority=settings.priority,
            options=settings.options,
            command_line=command_line,
        )

    def build_rules(self, records: Sequence[TextureRecord]) -> List[MipRule]:
        """Build rules for all records, keeping record order."""
        return [self.build_rule(record) for record in records]

    def generate(self, records: Sequence[TextureRecord]) -> str:
        """
        Generate the makefile fragment.

        Args:
            records: Parsed texture records in manifest order

        Returns:
            Makefile text: the variable block followed by the rule block
        """
        records = list(records)
        template_vars = {
            'variable_name': self.config.variable_name,
            'pad_width': self.config.pad_width,
            'records': records,
            'rules': self.build_rules(records),
        }

        template = self._get_template()
        content = template.render(**template_vars)

        logger.debug(f"Generated makefile rules for {len(records)} textures")
        return content

    def _get_template(self):
        """Get the override template, falling back to the built-in one."""
        if self.template_dir is not None:
            try:
                return self.env.get_template(TEMPLATE_NAME)
            except TemplateNotFound:
                logger.warning(f"Template {TEMPLATE_NAME} not found in {self.template_dir}, using built-in template")

        return self.env.from_string(BUILTIN_TEMPLATE)
