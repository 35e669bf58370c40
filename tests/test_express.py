"""Tests for express route extraction."""

from textwrap import dedent

import pytest

from swagme.extract.express import (
    extract_routes,
    find_route_entries,
    normalize_route_folder,
    resolve_base_routes,
    rewrite_path_params,
)
from swagme.records import RouteEntry

MAIN_FILE = dedent("""
    import express from 'express';
    import userRoutes from './routes/user.js';
    const postRoutes = require('./routes/post');

    const app = express();
    app.use(express.json());
    // app.use('/old', require('./routes/old'));
    app.use('/api/users', userRoutes);
    app.use("/api/posts", postRoutes);
    app.use('/admin', require('./routes/admin'));

    app.listen(3000);
""")

USER_ROUTES = dedent("""
    const router = require('express').Router();

    router.get('/', list);
    router.get('/:id', show);
    router.post('/', create);
    router.put('/:id', update);
    router.delete('/:id', remove);

    module.exports = router;
""")


class TestResolveBaseRoutes:
    """Test mount path discovery in the main file."""

    def test_all_mount_styles(self):
        assert resolve_base_routes(MAIN_FILE, "/routes") == {
            "user": "/api/users",
            "post": "/api/posts",
            "admin": "/admin",
        }

    def test_inline_require(self):
        text = "app.use('/users', require('./routes/user'));"
        assert resolve_base_routes(text, "/routes") == {"user": "/users"}

    def test_binding_must_come_first(self):
        text = dedent("""
            app.use('/late', late);
            const late = require('./routes/late');
        """)
        assert resolve_base_routes(text, "routes") == {}

    def test_nested_routes_folder(self):
        # main file sits in src/, next to routes/
        text = "const u = require('./routes/user');\napp.use('/u', u);"
        assert resolve_base_routes(text, "./src/routes/") == {"user": "/u"}

    def test_wildcard_mount_keeps_later_mounts(self):
        text = dedent("""
            app.use('/static/*', serveStatic);
            app.use('/users', require('./routes/user'));
            /* api docs */
            app.use('/posts', require('./routes/post'));
        """)
        assert resolve_base_routes(text, "/routes") == {
            "user": "/users",
            "post": "/posts",
        }

    def test_other_folder_ignored(self):
        text = "app.use('/x', require('./controllers/x'));"
        assert resolve_base_routes(text, "/routes") == {}

    def test_statements_on_one_line(self):
        text = (
            "const a = require('./routes/a'); const b = require('./routes/b');"
            " app.use('/a', a); app.use('/b', b);"
        )
        assert resolve_base_routes(text, "/routes") == {"a": "/a", "b": "/b"}

    def test_empty_folder(self):
        assert resolve_base_routes(MAIN_FILE, "") == {}


class TestFindRouteEntries:
    """Test verb call discovery in router files."""

    def test_router_file(self):
        assert find_route_entries(USER_ROUTES) == [
            RouteEntry("GET", "/"),
            RouteEntry("GET", "/{id}"),
            RouteEntry("POST", "/"),
            RouteEntry("PUT", "/{id}"),
            RouteEntry("DELETE", "/{id}"),
        ]

    def test_first_verb_wins(self):
        text = "app.post('/b', h) || app.get('/a', h)"
        assert find_route_entries(text) == [RouteEntry("GET", "/a")]

    def test_patch_and_quotes(self):
        text = 'router.patch(`/items/:itemId`, h)\nrouter.get("/x", h)'
        assert find_route_entries(text) == [
            RouteEntry("PATCH", "/items/{itemId}"),
            RouteEntry("GET", "/x"),
        ]

    def test_commented_routes_ignored(self):
        text = "// router.get('/hidden', h)\n/* router.post('/gone', h) */"
        assert find_route_entries(text) == []

    def test_wildcard_route_keeps_later_routes(self):
        text = dedent("""
            router.get('/files/*', download);
            router.post('/upload', upload);
            router.delete('/:id', remove);
            /** doc */
            router.put('/:id', update);
        """)
        assert find_route_entries(text) == [
            RouteEntry("GET", "/files/*"),
            RouteEntry("POST", "/upload"),
            RouteEntry("DELETE", "/{id}"),
            RouteEntry("PUT", "/{id}"),
        ]

    def test_comment_markers_inside_strings(self):
        text = 'router.get("/a//b", h) // old: router.get("/c", h)'
        assert find_route_entries(text) == [RouteEntry("GET", "/a//b")]

    def test_non_literal_paths_ignored(self):
        assert find_route_entries("router.get(path, h)") == []


class TestExtractRoutes:
    """Test the full two pass extraction."""

    @pytest.fixture
    def files(self):
        return {
            "user.js": USER_ROUTES,
            "post.js": "router.get('/:slug', h);",
            "admin.js": "router.get('/stats', h);",
            "unused.js": "router.get('/never', h);",
        }

    def test_records(self, files):
        records = extract_routes(MAIN_FILE, "/routes", list(files), files)

        assert [r.source_file_name for r in records] == [
            "user",
            "post",
            "admin",
        ]
        user = records[0]
        assert user.tag_name == "USER"
        assert user.base_route == "/api/users"
        assert len(user.routes) == 5
        assert records[1].routes == (RouteEntry("GET", "/{slug}"),)

    def test_unmounted_file_excluded(self, files):
        records = extract_routes(MAIN_FILE, "/routes", list(files), files)
        assert "unused" not in {r.source_file_name for r in records}

    def test_callable_reader(self, files):
        records = extract_routes(
            "app.use('/users', require('./routes/user'));",
            "/routes",
            ["user.js"],
            lambda name: files.get(name),
        )
        assert len(records) == 1
        assert records[0].base_route == "/users"

    def test_single_line_router(self):
        main = "app.use('/users', require('./routes/user'));"
        route = 'router.get("/list", handler); router.post("/add", handler2);'
        records = extract_routes(
            main, "/routes", ["user.js"], {"user.js": route}
        )

        assert len(records) == 1
        assert records[0].base_route == "/users"
        assert records[0].routes == (
            RouteEntry("GET", "/list"),
            RouteEntry("POST", "/add"),
        )

    def test_unreadable_file_skipped(self):
        main = "app.use('/users', require('./routes/user'));"
        assert extract_routes(main, "/routes", ["user.js"], {}) == []


class TestHelpers:
    """Test path helpers."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/user/:id", "/user/{id}"),
            ("/a/:x/b/:y", "/a/{x}/b/{y}"),
            ("/list", "/list"),
            ("/user/{id}", "/user/{id}"),
            ("/files/:name.:ext", "/files/{name}.{ext}"),
            ("/:id(\\d+)", "/{id}(\\d+)"),
        ],
    )
    def test_rewrite_path_params(self, path, expected):
        assert rewrite_path_params(path) == expected
        assert rewrite_path_params(expected) == expected

    @pytest.mark.parametrize(
        ("folder", "expected"),
        [
            ("/routes", "routes"),
            ("./src/routes/", "src/routes"),
            ("src\\routes", "src/routes"),
            ("/", ""),
        ],
    )
    def test_normalize_route_folder(self, folder, expected):
        assert normalize_route_folder(folder) == expected
