"""
Template Registry

Holds a profile's template store and renders templates against a context.
"""

from typing import Any, Dict, Mapping, Optional

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    Template,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
)
from jinja2 import TemplateError as JinjaTemplateError

from noteshelf.contexts.templating.defaults import NOTE_TEMPLATE_KEY
from noteshelf.contexts.templating.helpers import register_helpers
from noteshelf.contexts.templating.logger import log_render
from noteshelf.exceptions import TemplateError
from noteshelf.utils.timestamp import Clock, system_clock

# Filename Jinja gives to frames of compiled template code
TEMPLATE_FRAME_FILENAME = "<template>"


def _runtime_lineno(error: Exception) -> Optional[int]:
    """Find the template line an error was raised on by walking its traceback."""
    lineno = None
    tb = error.__traceback__
    while tb is not None:
        if tb.tb_frame.f_code.co_filename == TEMPLATE_FRAME_FILENAME:
            lineno = tb.tb_lineno
        tb = tb.tb_next
    return lineno


def create_environment(templates: Mapping[str, str], clock: Clock) -> Environment:
    """
    Create the Jinja2 environment used for note templates.

    Variables use ``{{ }}``; block tags and comments use LaTeX-safe delimiters
    so that ``{%`` and ``{#`` in LaTeX source are left alone:
    - Variable: {{ var }}
    - Block: <%% block %%>
    - Comment: <# comment #>
    """
    env = Environment(
        loader=DictLoader(dict(templates)),
        # Catches silent failures
        undefined=StrictUndefined,
        block_start_string="<%%",
        block_end_string="%%>",
        comment_start_string="<#",
        comment_end_string="#>",
        # Preserve whitespace (important for LaTeX)
        trim_blocks=False,
        lstrip_blocks=False,
        keep_trailing_newline=True,
        autoescape=False,
    )
    register_helpers(env, clock)
    return env


class TemplateRegistry:
    """
    Registry for compiling and caching a profile's Jinja2 templates.

    Templates are looked up by key (``"_default"``, ``"master/_default"``,
    ``"lecture"``); a missing key falls back to the given fallback key.
    """

    def __init__(self, templates: Mapping[str, str], clock: Clock = system_clock):
        """
        Initialize the template registry.

        Args:
            templates: Template key -> raw template text
            clock: Source of today's date for the ``reldate`` helper
        """
        self.templates: Dict[str, str] = dict(templates)
        self._cache: Dict[str, Template] = {}
        self.env = create_environment(self.templates, clock)

    def has_template(self, key: str) -> bool:
        return key in self.templates

    def resolve_key(self, key: str, fallback: str = NOTE_TEMPLATE_KEY) -> str:
        """
        Pick the template key that will actually be rendered.

        Raises:
            TemplateError: If neither the key nor the fallback exist
        """
        if self.has_template(key):
            return key
        if self.has_template(fallback):
            return fallback
        raise TemplateError(f"No template '{key}' and no fallback '{fallback}'", template_name=key)

    def get_template(self, key: str) -> Template:
        """
        Get a compiled template by key, compiling and caching it if necessary.

        Raises:
            TemplateError: If the template is unknown or has syntax errors
        """
        if key in self._cache:
            return self._cache[key]

        try:
            template = self.env.get_template(key)
        except TemplateNotFound as e:
            raise TemplateError("Template not found", template_name=key, original_error=e) from e
        except TemplateSyntaxError as e:
            raise TemplateError(
                "Template syntax error",
                template_name=key,
                lineno=e.lineno,
                original_error=e,
            ) from e

        self._cache[key] = template
        return template

    def render(
        self,
        key: str,
        context: Mapping[str, Any],
        fallback: str = NOTE_TEMPLATE_KEY,
        target: str = "",
    ) -> str:
        """
        Render a template with the given context.

        Args:
            key: Requested template key
            context: Render context
            fallback: Key used when the requested one is not in the store
            target: What is being rendered, for logging

        Returns:
            Rendered text

        Raises:
            TemplateError: On unknown templates, syntax errors, undefined references or
                failing expressions
        """
        resolved = self.resolve_key(key, fallback)
        template = self.get_template(resolved)
        log_render(resolved, key, target or resolved)

        try:
            return template.render(context)
        except UndefinedError as e:
            raise TemplateError(
                "Undefined reference",
                template_name=resolved,
                lineno=_runtime_lineno(e),
                original_error=e,
            ) from e
        except TemplateSyntaxError as e:
            raise TemplateError(
                "Template syntax error",
                template_name=resolved,
                lineno=e.lineno,
                original_error=e,
            ) from e
        except JinjaTemplateError as e:
            raise TemplateError(
                f"Render failed: {e}",
                template_name=resolved,
                lineno=_runtime_lineno(e),
                original_error=e,
            ) from e
        except (TypeError, ValueError, ArithmeticError) as e:
            # Helpers or expressions given unusable values
            raise TemplateError(
                f"Render failed: {type(e).__name__}",
                template_name=resolved,
                lineno=_runtime_lineno(e),
                original_error=e,
            ) from e

    def clear_cache(self):
        """Clear the compiled template cache."""
        self._cache.clear()

    def is_cached(self, key: str) -> bool:
        return key in self._cache
