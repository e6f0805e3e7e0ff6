import pytest

from text2query.conversion.fallback import FALLBACK_CATALOG, lookup
from text2query.conversion.orchestrator import (
    ConversionOrchestrator,
    ServiceUnavailableError,
    ValidationError,
)
from text2query.core.constants import Dialect
from text2query.core.prompts import FALLBACK_NOTE


def test_catalog_has_one_entry_per_dialect():
    assert set(FALLBACK_CATALOG) == set(Dialect)
    assert all(entry.dialect is dialect for dialect, entry in FALLBACK_CATALOG.items())


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        FALLBACK_CATALOG[Dialect.SQL] = FALLBACK_CATALOG[Dialect.MONGODB]


def test_validate_normalizes_request():
    request = ConversionOrchestrator.validate("  list users  ", "SQL")

    assert request.text == "list users"
    assert request.dialect is Dialect.SQL


@pytest.mark.asyncio
async def test_convert_success_has_no_note(healthy_gateway):
    orchestrator = ConversionOrchestrator(healthy_gateway)

    result = await orchestrator.convert("Show all users who registered in the last 30 days", "sql")

    assert result.query == "SELECT * FROM users WHERE ..."
    assert result.note is None
    assert not result.is_fallback


@pytest.mark.asyncio
@pytest.mark.parametrize("dialect", list(Dialect))
async def test_convert_failure_serves_catalog_entry(failing_gateway, dialect):
    orchestrator = ConversionOrchestrator(failing_gateway)

    result = await orchestrator.convert("whatever was asked", dialect.value)

    assert result.query == lookup(dialect)
    assert result.note == FALLBACK_NOTE


@pytest.mark.asyncio
async def test_convert_failure_is_logged(failing_gateway, caplog):
    orchestrator = ConversionOrchestrator(failing_gateway)

    with caplog.at_level("ERROR"):
        await orchestrator.convert("x", "sql")

    assert "connection refused" in caplog.text


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", " \t\n", 7])
async def test_convert_rejects_missing_text(healthy_gateway, text):
    orchestrator = ConversionOrchestrator(healthy_gateway)

    with pytest.raises(ValidationError, match="Text is required"):
        await orchestrator.convert(text, "sql")

    healthy_gateway.invoke.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("fmt", [None, "graphql", "postgres", ["sql"]])
async def test_convert_rejects_unknown_format(healthy_gateway, fmt):
    orchestrator = ConversionOrchestrator(healthy_gateway)

    with pytest.raises(ValidationError, match=r"Valid format \(sql or mongodb\) is required"):
        await orchestrator.convert("x", fmt)

    healthy_gateway.invoke.assert_not_called()


@pytest.mark.asyncio
async def test_convert_without_gateway_is_unavailable():
    orchestrator = ConversionOrchestrator(None)

    with pytest.raises(ServiceUnavailableError):
        await orchestrator.convert("x", "mongodb")


@pytest.mark.asyncio
async def test_convert_sends_built_prompt(healthy_gateway):
    orchestrator = ConversionOrchestrator(healthy_gateway)

    await orchestrator.convert("  Count orders  ", "mongodb")

    prompt = healthy_gateway.invoke.await_args.args[0]
    assert "MongoDB query syntax:\nCount orders\n" in prompt
