"""Configuration loading for devtools-coverage.

Collector options can be given per call, and project-wide defaults can be
kept in pyproject.toml:

    [tool.devtools-coverage.js]
    reset_on_navigation = true
    report_anonymous_scripts = false
    include_raw_script_coverage = false
    ignored_script_urls = ["__pyppeteer_evaluation_script__", "__my_driver_script__"]

    [tool.devtools-coverage.css]
    reset_on_navigation = true

A configured ``ignored_script_urls`` list replaces the built-in one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import tomllib
from typing import TYPE_CHECKING, Any, TypeVar


if TYPE_CHECKING:
    from pathlib import Path


# Scripts that automation clients evaluate in the page are tagged with these URLs.
EVALUATION_SCRIPT_URL = '__devtools_evaluation_script__'
AUTOMATION_SCRIPT_URLS = frozenset({
    EVALUATION_SCRIPT_URL,
    '__puppeteer_evaluation_script__',
    '__pyppeteer_evaluation_script__',
    '__playwright_evaluation_script__',
})

OptionsT = TypeVar('OptionsT', 'JSCoverageOptions', 'CSSCoverageOptions')


@dataclass(frozen=True)
class JSCoverageOptions:
    """Options for a JavaScript coverage session.

    Attributes:
        reset_on_navigation: Discard collected scripts when the page's
            execution contexts are cleared.
        report_anonymous_scripts: Report scripts without a URL under a
            synthesized ``debugger://VM<id>`` URL instead of skipping them.
        include_raw_script_coverage: Attach the browser's per-script result
            to each entry and ask the browser for call counts.
        ignored_script_urls: Script URLs never reported, by default the URLs
            automation clients give to the scripts they evaluate in the page.
    """

    reset_on_navigation: bool = True
    report_anonymous_scripts: bool = False
    include_raw_script_coverage: bool = False
    ignored_script_urls: frozenset[str] = AUTOMATION_SCRIPT_URLS


@dataclass(frozen=True)
class CSSCoverageOptions:
    """Options for a CSS coverage session.

    Attributes:
        reset_on_navigation: Discard collected stylesheets when the page's
            execution contexts are cleared.
    """

    reset_on_navigation: bool = True


@dataclass(frozen=True)
class CoverageConfig:
    """Default options for both collectors."""

    js: JSCoverageOptions = field(default_factory=JSCoverageOptions)
    css: CSSCoverageOptions = field(default_factory=CSSCoverageOptions)


def _read_value(option_name: str, default: object, value: object, section: str) -> Any:
    where = f'[tool.devtools-coverage.{section}] {option_name}'
    if isinstance(default, frozenset):
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            msg = f'{where} must be a list of strings, got {value!r}'
            raise ValueError(msg)
        return frozenset(value)
    if not isinstance(value, bool):
        msg = f'{where} must be a boolean, got {value!r}'
        raise ValueError(msg)
    return value


def _read_options(options_type: type[OptionsT], table: dict[str, Any], section: str) -> OptionsT:
    values: dict[str, Any] = {}
    for option in fields(options_type):
        if option.name in table:
            values[option.name] = _read_value(option.name, option.default, table[option.name], section)
    return options_type(**values)


def load_config(rootdir: Path) -> CoverageConfig:
    """Load collector defaults from pyproject.toml.

    Reads the [tool.devtools-coverage] section from pyproject.toml in the
    given directory. Returns default configuration if the file or section
    does not exist. Unknown keys are ignored.

    Args:
        rootdir: Directory containing pyproject.toml.

    Returns:
        CoverageConfig with values from pyproject.toml or defaults.

    Raises:
        ValueError: If a known option has the wrong type.
    """
    pyproject_path = rootdir / 'pyproject.toml'

    if not pyproject_path.exists():
        return CoverageConfig()

    with pyproject_path.open('rb') as f:
        data = tomllib.load(f)

    tool_config = data.get('tool', {}).get('devtools-coverage', {})

    return CoverageConfig(
        js=_read_options(JSCoverageOptions, tool_config.get('js', {}), 'js'),
        css=_read_options(CSSCoverageOptions, tool_config.get('css', {}), 'css'),
    )


def merge_options(options: OptionsT, **overrides: Any) -> OptionsT:
    """Apply keyword overrides on top of a set of options.

    Overrides that are None are treated as not provided. Collections of
    script URLs are stored as frozensets.

    Args:
        options: Base options, usually from ``load_config``.
        **overrides: Option names mapped to their new values.

    Returns:
        A new options object with the overrides applied.

    Raises:
        TypeError: If an override does not name an option.
    """
    known = {option.name for option in fields(options)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        msg = f'Unknown {type(options).__name__} option(s): {", ".join(unknown)}'
        raise TypeError(msg)
    changes = {
        name: frozenset(value) if isinstance(value, (list, set, tuple)) else value
        for name, value in overrides.items()
        if value is not None
    }
    return replace(options, **changes)
