"""Shared project fixtures written to tmp_path."""

import json
from pathlib import Path
from textwrap import dedent

import pytest

from swagme.config import SwagmeConfig, save_config

EXPRESS_MAIN = dedent("""
    const express = require('express');
    const userRoutes = require('./routes/user');

    const app = express();
    app.use(express.json());
    app.use('/users', userRoutes);
    app.use('/orders', require('./routes/order'));

    app.listen(3000);
""")

USER_ROUTER = dedent("""
    const router = require('express').Router();

    /**
     * @swagger
     * /users/search:
     *   get:
     *     summary: Search users
     */
    router.get('/list', list);
    router.post('/add', add);
    router.get('/:id', show);

    module.exports = router;
""")

ORDER_ROUTER = "router.delete('/:orderId', remove);\n"

USER_MODEL = dedent("""
    const mongoose = require('mongoose');

    const userSchema = new mongoose.Schema({
        name: { type: String, required: true },
        age: { type: Number },
    }, { timestamps: true });

    module.exports = mongoose.model('User', userSchema);
""")

NEXT_HANDLER = (
    "export default function handler(req, res) {\n"
    "  res.status(200).json({ ok: true })\n"
    "}\n"
)


def write_files(root: Path, files: dict[str, str]) -> None:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


@pytest.fixture
def express_project(tmp_path: Path) -> Path:
    """An express + mongoose project without a swagme config."""
    package = {
        "name": "shop-api",
        "version": "2.1.0",
        "description": "Shop",
        "dependencies": {"express": "^4.19.0", "mongoose": "^8.0.0"},
    }
    write_files(
        tmp_path,
        {
            "package.json": json.dumps(package),
            "index.js": EXPRESS_MAIN,
            "routes/user.js": USER_ROUTER,
            "routes/order.js": ORDER_ROUTER,
            "models/user.js": USER_MODEL,
            ".gitignore": "node_modules\n",
        },
    )
    return tmp_path


@pytest.fixture
def express_config() -> SwagmeConfig:
    return SwagmeConfig(
        name="shop-api",
        version="2.1.0",
        authorization="bearer",
        main="/index.js",
        database="mongoose",
        schema="/models",
        routes="/routes",
        docs="/docs",
    )


@pytest.fixture
def configured_express_project(
    express_project: Path, express_config: SwagmeConfig
) -> Path:
    save_config(express_project, express_config)
    return express_project


@pytest.fixture
def next_project(tmp_path: Path) -> Path:
    package = {
        "name": "next-app",
        "version": "0.1.0",
        "dependencies": {"next": "14.0.0", "react": "18.2.0"},
    }
    write_files(
        tmp_path,
        {
            "package.json": json.dumps(package),
            "next.config.js": "module.exports = {}\n",
            "pages/api/hello.ts": NEXT_HANDLER,
            "pages/api/users/index.ts": NEXT_HANDLER,
            "pages/api/users/[id].ts": NEXT_HANDLER,
            "pages/index.tsx": "export default function Home() {}\n",
        },
    )
    return tmp_path


@pytest.fixture
def write_tree():
    """``write_tree(root, {"rel/path": "content"})``."""
    return write_files
