"""Express route extraction.

Two passes. The main file (where ``app`` is created) is read statement by
statement to learn where each router module is mounted:

    const users = require('./routes/user');      # binding: users -> user
    import posts from './routes/post';           # binding: posts -> post
    app.use('/users', users);                    # user -> /users
    app.use('/admin', require('./routes/admin')) # admin -> /admin

Bindings must appear before the ``app.use`` that references them. Then each
router file is scanned for ``.get('/path'`` style calls. Router files that
were never mounted are left out.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import structlog

from swagme.extract.blocks import (
    FileReader,
    strip_comments,
    strip_extension,
)
from swagme.records import ROUTER_METHODS, RouteEntry, RouteRecord

logger = structlog.get_logger(__name__)

MOUNT_TOKEN = ".use("
REQUIRE_TOKEN = "require("

# first quoted absolute path followed by a comma: app.use('/users', ...)
_MOUNT_PATH_RE = re.compile(r"([\"'`])(/[^\"'`]*)\1\s*,")
_IMPORT_RE = re.compile(r"^\s*import\s+(?:\*\s+as\s+)?([\w$]+)\s+from\b")
_REQUIRE_ASSIGN_RE = re.compile(
    r"\b(?:const|let|var)\s+([\w$]+)\s*=\s*require\s*\("
)
_STRING_LITERAL_RE = re.compile(r"([\"'`]).*?\1")
_PATH_PARAM_RE = re.compile(r":([\w$]+)")
_STATEMENT_SPLIT_RE = re.compile(r"[\n;]")

_VERB_CALL_RES = {
    method: re.compile(
        r"\." + method.lower() + r"\(\s*([\"'`])(/[^\"'`]*)\1"
    )
    for method in ROUTER_METHODS
}


def extract_routes(
    main_file_text: str,
    route_folder_name: str,
    route_file_names: Iterable[str],
    read_file: FileReader,
) -> list[RouteRecord]:
    """Build one RouteRecord per mounted router file.

    ``read_file`` is either a callable returning a router file's text or
    a mapping of file name to text; names it can't supply are skipped.
    """
    base_routes = resolve_base_routes(main_file_text, route_folder_name)
    lookup = read_file if callable(read_file) else read_file.get

    records = []
    for file_name in route_file_names:
        name = strip_extension(file_name)
        base_route = base_routes.get(name)
        if not base_route:
            logger.debug("router not mounted", file=file_name)
            continue

        text = lookup(file_name)
        if text is None:
            logger.debug("router file unavailable", file=file_name)
            continue

        records.append(
            RouteRecord(
                tag_name=name.upper(),
                source_file_name=name,
                base_route=base_route,
                routes=tuple(find_route_entries(text)),
            )
        )
    return records


def normalize_route_folder(route_folder_name: str) -> str:
    """``./src/routes/`` -> ``src/routes``."""
    folder = route_folder_name.replace("\\", "/").strip()
    while folder.startswith("./"):
        folder = folder[2:]
    return folder.strip("/")


def _folder_token(line: str, folder: str) -> str | None:
    # main files often live next to the routes folder, so "./routes/user"
    # also counts for a configured "src/routes"
    candidates = [folder + "/"]
    tail = folder.rsplit("/", 1)[-1]
    if tail != folder:
        candidates.append(tail + "/")
    for token in candidates:
        if token in line:
            return token
    return None


def _module_name(line: str, token: str) -> str:
    """Module path following the folder token, up to the closing quote."""
    rest = line.split(token, 1)[1]
    match = re.match(r"[^\"'`]+", rest)
    return strip_extension(match.group(0).strip()) if match else ""


def _mount_path(line: str) -> str | None:
    match = _MOUNT_PATH_RE.search(line)
    return match.group(2) if match else None


def _references(code: str, variable: str) -> bool:
    pattern = r"(?<![\w$])" + re.escape(variable) + r"(?![\w$])"
    return re.search(pattern, code) is not None


def _binding_name(line: str) -> str | None:
    match = _IMPORT_RE.match(line) or _REQUIRE_ASSIGN_RE.search(line)
    return match.group(1) if match else None


def resolve_base_routes(
    main_file_text: str, route_folder_name: str
) -> dict[str, str]:
    """Map router module name (no extension) to its mount path."""
    folder = normalize_route_folder(route_folder_name)
    if not folder:
        return {}

    bindings: dict[str, str] = {}
    base_routes: dict[str, str] = {}

    for line in _STATEMENT_SPLIT_RE.split(strip_comments(main_file_text)):
        token = _folder_token(line, folder)

        if MOUNT_TOKEN in line:
            base_route = _mount_path(line)
            if base_route is None:
                continue
            if token and REQUIRE_TOKEN in line:
                module = _module_name(line, token)
                if module:
                    base_routes[module] = base_route
                continue
            # app.use('/users', users) - look the variable up
            code = _STRING_LITERAL_RE.sub("", line)
            for variable, module in bindings.items():
                if _references(code, variable):
                    base_routes[module] = base_route
        elif token:
            variable = _binding_name(line)
            module = _module_name(line, token)
            if variable and module:
                bindings[variable] = module

    return base_routes


def find_route_entries(file_text: str) -> list[RouteEntry]:
    """Find ``.get('/x'`` style calls, one entry per statement at most.

    Statements are lines, further split on ``;`` so that
    ``router.get('/a', h); router.post('/b', h);`` gives two entries.
    """
    entries = []
    for line in _STATEMENT_SPLIT_RE.split(strip_comments(file_text)):
        for method in ROUTER_METHODS:
            match = _VERB_CALL_RES[method].search(line)
            if match:
                path = rewrite_path_params(match.group(2))
                entries.append(RouteEntry(method=method, path=path))
                break
    return entries


def rewrite_path_params(path: str) -> str:
    """``/user/:id`` -> ``/user/{id}``."""
    return _PATH_PARAM_RE.sub(r"{\1}", path)
