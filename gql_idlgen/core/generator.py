"""Rendering and writing of generated modules.

Renders Jinja2 templates to produce Python code from generation models.

Supports custom templates via the template_dir parameter:
    generator = CodeGenerator(output_dir, config, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import logging
import os
from pathlib import Path

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from .config import MappingConfig
from .errors import RenderError, WriteError
from .hooks import HookRunner
from .model import GenerationModel
from .naming import method_name, safe_comment, safe_docstring, safe_identifier, snake_case

logger = logging.getLogger(__name__)


class CodeGenerator:
    """Renders generation models and writes them below an output directory.

    Available templates to override:
        - type.py.j2: object types and inputs (pydantic models)
        - interface.py.j2: interfaces (pydantic base models)
        - enum.py.j2: enums
        - union.py.j2: unions (marker base classes)
        - operation.py.j2: query/mutation/subscription protocols
        - resolver.py.j2: field resolver protocols
    """

    def __init__(
        self,
        output_dir: str | Path,
        config: MappingConfig | None = None,
        template_dir: str | None = None,
        hooks: HookRunner | None = None,
    ):
        """Initialize the code generator.

        Args:
            output_dir: Directory where generated code will be written
            config: Mapping configuration exposed to templates as ``config``
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
            hooks: Post-generation hooks applied to every rendered file
        """
        self.output_dir = Path(output_dir)
        self.config = (config or MappingConfig()).with_defaults()
        self.hooks = hooks or HookRunner()

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_idlgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["snake_case"] = snake_case
        self.env.filters["method_name"] = method_name
        self.env.filters["safe_identifier"] = safe_identifier
        self.env.filters["repr"] = repr
        self.env.filters["safe_docstring"] = safe_docstring
        self.env.filters["safe_comment"] = safe_comment

    def prepare_output_dir(self):
        """Create the output directory. Existing files are left in place."""
        os.makedirs(self.output_dir, exist_ok=True)

    def render(self, model: GenerationModel) -> str:
        """Render a model with its template and check the result compiles."""
        template_name = model.template.file_name
        try:
            template = self.env.get_template(template_name)
            content = template.render(model=model, config=self.config)
        except TemplateError as e:
            raise RenderError(template_name, model.relative_path, str(e)) from e

        try:
            compile(content, model.relative_path, "exec")
        except (SyntaxError, ValueError) as e:
            raise RenderError(
                template_name, model.relative_path, f"generated invalid Python: {e}"
            ) from e
        return content

    def write(self, relative_path: str, content: str) -> Path:
        full_path = self.output_dir / relative_path
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            with open(full_path, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
        except OSError as e:
            raise WriteError(str(full_path), str(e)) from e
        return full_path

    def generate_file(self, model: GenerationModel) -> Path:
        """Render a model, run post hooks and write the file."""
        content = self.render(model)
        content = self.hooks.run_post_hooks(model.relative_path, content)
        path = self.write(model.relative_path, content)
        logger.debug("Generated %s (%s)", path, model.template.value)
        return path
