from __future__ import annotations

import pytest

from zplgen.app import create_app
from zplgen.services.zpl_generator import SessionConfig, ZplGenerator


@pytest.fixture()
def gen() -> ZplGenerator:
    """Gerador com separadores suprimidos (padrão)."""
    return ZplGenerator()


@pytest.fixture()
def gen_crlf() -> ZplGenerator:
    return ZplGenerator(suppress_separator=False)


@pytest.fixture()
def app(tmp_path):
    app = create_app(root=tmp_path, config=SessionConfig())
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(app):
    return app.test_client()
