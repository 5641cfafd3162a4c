"""
Base class for the code generators.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError

from forge.parser.shared.exceptions import OutputGenerationError
from forge.typing.model import CompiledModel

logger = logging.getLogger(__name__)


class BaseGenerator(ABC):
    """A backend that renders one artifact from a compiled model."""

    output_file: str = ""

    def __init__(self, model: CompiledModel) -> None:
        self.model = model

        templates_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,  # We're generating Python source, not HTML
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    @abstractmethod
    def generate(self) -> str:
        """Render the artifact as text."""
        pass

    def render_template(self, template_name: str, **context) -> str:
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            raise OutputGenerationError(f"Failed to render {template_name}: {e}") from e

    def write(self, output_folder: Path, file_name: str | None = None) -> Path:
        """
        Write the rendered artifact.

        Returns:
            Path to the written file

        Raises:
            OutputGenerationError: If the file cannot be written
        """
        output_path = Path(output_folder) / (file_name or self.output_file)
        content = self.generate()
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputGenerationError(f"Failed to write {output_path}: {e}") from e
        logger.info(f"Wrote {output_path}")
        return output_path
