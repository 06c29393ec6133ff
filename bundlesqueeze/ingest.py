"""Ingestion - turn the build hook's module list into ModuleRecords.

Two delivery channels exist for the same data:
1. The JSON asset written next to the bundle (bundle-analyzer.json)
2. The HTML report, which carries the list inlined in a script element

load_records() tries them in that order. A source that is missing or does
not parse is logged and the next one is attempted; only when every source
fails is MalformedInputError raised.

Besides the build hook's own format, dependency-cruiser output is accepted
(modules with source/dependencies/minifiedSize).
"""

import json
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup

from bundlesqueeze.graph.exceptions import MalformedInputError
from bundlesqueeze.graph.types import ModuleRecord
from bundlesqueeze.utils.constants import DATA_ELEMENT_ID, DATA_JSON_NAME, REPORT_HTML_NAME
from bundlesqueeze.utils.helpers import load_json_file
from bundlesqueeze.utils.logging import logger


# ============================================================================
# RECORD VALIDATION
# ============================================================================


def _require_size(item: dict, key: str, where: str, optional: bool = False) -> int | None:
    value = item.get(key)
    if value is None:
        if optional:
            return None
        raise MalformedInputError(f"{where}: missing '{key}'", {"record": where, "field": key})
    # bool is an int subclass; a true/false size is a schema error
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MalformedInputError(
            f"{where}: '{key}' must be a non-negative integer, got {value!r}",
            {"record": where, "field": key},
        )
    return value


def _require_ids(item: dict, key: str, where: str, optional: bool = False) -> tuple[str, ...]:
    value = item.get(key)
    if value is None:
        if optional:
            return ()
        raise MalformedInputError(f"{where}: missing '{key}'", {"record": where, "field": key})
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise MalformedInputError(
            f"{where}: '{key}' must be a list of strings",
            {"record": where, "field": key},
        )
    return tuple(value)


def record_from_dict(item: Any, position: int = 0) -> ModuleRecord:
    """Validate one build-hook record and convert it."""
    where = f"record #{position}"
    if not isinstance(item, dict):
        raise MalformedInputError(f"{where}: expected an object, got {type(item).__name__}")

    module_id = item.get("id")
    if not isinstance(module_id, str) or not module_id:
        raise MalformedInputError(f"{where}: 'id' must be a non-empty string", {"record": where})
    where = f"record {module_id!r}"

    chunk = item.get("chunk")
    if chunk is not None and not isinstance(chunk, str):
        raise MalformedInputError(f"{where}: 'chunk' must be a string", {"record": where})

    return ModuleRecord(
        id=module_id,
        size=_require_size(item, "size", where),
        rendered_size=_require_size(item, "renderedSize", where, optional=True),
        chunk=chunk,
        imported_ids=_require_ids(item, "importedIds", where),
        dynamically_imported_ids=_require_ids(item, "dynamicallyImportedIds", where, optional=True),
    )


def records_from_depcruise(modules: list[Any]) -> list[ModuleRecord]:
    """Convert dependency-cruiser modules.

    Core (built-in) modules are dropped, both as records and as edges.
    Unresolvable dependencies are kept as dangling edges.
    """
    records = []
    for position, module in enumerate(modules):
        if not isinstance(module, dict) or not isinstance(module.get("source"), str):
            raise MalformedInputError(f"module #{position}: missing 'source'")
        if module.get("coreModule"):
            continue

        where = f"module {module['source']!r}"
        minified = _require_size(module, "minifiedSize", where, optional=True)
        size = _require_size(module, "size", where, optional=minified is not None)

        static_ids: list[str] = []
        dynamic_ids: list[str] = []
        for dep in module.get("dependencies", []):
            if not isinstance(dep, dict) or dep.get("coreModule"):
                continue
            resolved = dep.get("resolved")
            if not isinstance(resolved, str):
                continue
            (dynamic_ids if dep.get("dynamic") else static_ids).append(resolved)

        records.append(
            ModuleRecord(
                id=module["source"],
                size=size if size is not None else minified,
                rendered_size=minified,
                imported_ids=tuple(static_ids),
                dynamically_imported_ids=tuple(dynamic_ids),
            )
        )
    return records


def parse_records(data: Any) -> list[ModuleRecord]:
    """Convert decoded JSON (either supported format) into records.

    Raises:
        MalformedInputError: On schema violations or duplicate ids
    """
    if isinstance(data, dict) and isinstance(data.get("modules"), list):
        data = data["modules"]
    if not isinstance(data, list):
        raise MalformedInputError(
            f"Expected a list of modules, got {type(data).__name__}",
        )

    if data and isinstance(data[0], dict) and "source" in data[0] and "id" not in data[0]:
        records = records_from_depcruise(data)
    else:
        records = [record_from_dict(item, position) for position, item in enumerate(data)]

    seen: set[str] = set()
    duplicates = set()
    for record in records:
        if record.id in seen:
            duplicates.add(record.id)
        seen.add(record.id)
    if duplicates:
        duplicates = sorted(duplicates)
        raise MalformedInputError(
            f"Duplicate module ids: {', '.join(duplicates)}",
            {"duplicates": duplicates},
        )
    return records


# ============================================================================
# SOURCES
# ============================================================================


def extract_inlined_json(html: str, element_id: str = DATA_ELEMENT_ID) -> Any:
    """Decode the JSON inlined in the report element.

    Raises:
        MalformedInputError: If the element is absent or empty
        json.JSONDecodeError: If its content is not valid JSON
    """
    soup = BeautifulSoup(html, "html.parser")
    element = soup.find(id=element_id)
    if element is None:
        raise MalformedInputError(f"No element with id '{element_id}' in document")
    text = element.get_text().strip()
    if not text:
        raise MalformedInputError(f"Element '{element_id}' is empty")
    return json.loads(text)


def load_json_source(path: Path) -> list[ModuleRecord]:
    return parse_records(load_json_file(path))


def load_html_source(path: Path) -> list[ModuleRecord]:
    html = path.read_text(encoding="utf-8")
    return parse_records(extract_inlined_json(html))


def load_records(
    json_path: str | Path | None = None,
    html_path: str | Path | None = None,
) -> list[ModuleRecord]:
    """Load records from the JSON asset, falling back to the HTML report.

    Args:
        json_path: JSON asset path, or None to skip this source
        html_path: HTML report path, or None to skip this source

    Returns:
        Validated records from the first source that loads

    Raises:
        MalformedInputError: If no source could be loaded. details maps each
            attempted source path to its failure reason.
    """
    sources = []
    if json_path is not None:
        sources.append((Path(json_path), load_json_source))
    if html_path is not None:
        sources.append((Path(html_path), load_html_source))
    if not sources:
        raise MalformedInputError("No module data source given")

    failures: dict[str, str] = {}
    for path, loader in sources:
        try:
            records = loader(path)
        except FileNotFoundError:
            failures[str(path)] = "not found"
            logger.info(f"Module data source not found: {path}")
            continue
        except (json.JSONDecodeError, MalformedInputError, UnicodeDecodeError) as e:
            failures[str(path)] = str(e)
            logger.warning(f"Could not parse module data from {path}: {e}")
            continue

        logger.debug(f"Loaded {len(records)} modules from {path}")
        return records

    raise MalformedInputError(
        "No usable module data: " + "; ".join(f"{p}: {reason}" for p, reason in failures.items()),
        failures,
    )


def resolve_sources(
    source: str | Path | None,
    default_json: str | Path = DATA_JSON_NAME,
    default_html: str | Path = REPORT_HTML_NAME,
) -> tuple[Path | None, Path | None]:
    """Map a user-supplied source to (json_path, html_path).

    A .json file is tried first with the sibling HTML report as fallback,
    a .html file is used alone, a directory is searched for both default
    names, and None means the configured defaults.
    """
    if source is None:
        return Path(default_json), Path(default_html)

    path = Path(source)
    if path.is_dir():
        return path / DATA_JSON_NAME, path / REPORT_HTML_NAME
    if path.suffix.lower() in (".html", ".htm"):
        return None, path
    return path, path.parent / REPORT_HTML_NAME
