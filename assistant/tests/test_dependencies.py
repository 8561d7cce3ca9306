"""Tests for the shared-dependency lifecycle."""
import pytest

import core.dependencies as deps
from core.interpreter import CommandInterpreter


@pytest.fixture(autouse=True)
def _reset():
    deps._llm_client = None
    yield
    deps._llm_client = None


def test_get_before_init_raises():
    with pytest.raises(RuntimeError, match="not initialized"):
        deps.get_llm_client()


@pytest.mark.asyncio
async def test_init_is_idempotent():
    deps.init_dependencies()
    first = deps.get_llm_client()
    deps.init_dependencies()
    assert deps.get_llm_client() is first
    await deps.shutdown_dependencies()


@pytest.mark.asyncio
async def test_interpreters_share_client():
    deps.init_dependencies()
    a = deps.get_interpreter()
    b = deps.get_interpreter()
    assert a is not b
    assert a.llm is b.llm is deps.get_llm_client()
    await deps.shutdown_dependencies()


@pytest.mark.asyncio
async def test_session_closes_client():
    async with deps.interpreter_session() as interpreter:
        assert isinstance(interpreter, CommandInterpreter)
        assert interpreter.is_processing is False
    assert deps._llm_client is None
