import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from airss.errors import CompletionError, ConfigError
from airss.scoring import (
    OpenAIProvider,
    ScoringEngine,
    build_provider,
    compile_prompt_template,
)

from .conftest import NOW, ScriptedProvider


def make_engine(store, provider, source="Title: {{ Title }}"):
    return ScoringEngine(
        store=store,
        provider=provider,
        template=compile_prompt_template(source),
        model="test-model",
    )


def test_run_scores_unscored_articles(store, make_article):
    store.insert(make_article("z80", title="Z80 Project"))
    store.insert(make_article("lamp", title="Smart Lamp", published=NOW - datetime.timedelta(hours=1)))
    provider = ScriptedProvider({"Z80": "Score: 95\n- a Z80", "Lamp": "Rating: 10"})

    stats = make_engine(store, provider).run()

    assert (stats.candidates, stats.scored, stats.skipped) == (2, 2, 0)
    z80 = store.get("z80")
    assert z80.score == "95"
    assert z80.analysis == "Score: 95\n- a Z80"
    assert z80.model == "test-model"
    assert store.get("lamp").score == "10"
    assert provider.prompts == ["Title: Z80 Project", "Title: Smart Lamp"]


def test_run_with_nothing_to_score(store, make_article):
    store.insert(make_article("done", score="50"))
    provider = ScriptedProvider({})

    stats = make_engine(store, provider).run()

    assert stats.candidates == 0
    assert provider.prompts == []


def test_run_skips_failed_calls_and_continues(store, make_article):
    store.insert(make_article("bad", title="Broken"))
    store.insert(make_article("good", title="Working", published=NOW - datetime.timedelta(hours=1)))
    provider = ScriptedProvider({"Broken": CompletionError("boom"), "Working": "Score: 60"})

    stats = make_engine(store, provider).run()

    assert (stats.scored, stats.skipped) == (1, 1)
    assert store.get("bad").score == ""
    assert store.get("good").score == "60"


def test_run_skips_template_errors(store, make_article):
    store.insert(make_article("a"))
    provider = ScriptedProvider({})

    stats = make_engine(store, provider, source="{{ Missing }}").run()

    assert stats.skipped == 1
    assert provider.prompts == []


def test_run_skips_articles_whose_prompt_fails_to_render(store, make_article):
    store.insert(make_article("z80", title="Z80 Project"))
    store.insert(make_article("lamp", title="Smart Lamp", published=NOW - datetime.timedelta(hours=1)))
    provider = ScriptedProvider({})

    stats = make_engine(store, provider, source="{{ Title + 1 }}").run()

    assert (stats.candidates, stats.scored, stats.skipped) == (2, 0, 2)
    assert provider.prompts == []
    assert store.get("z80").score == ""


def test_provider_factory_is_not_called_without_candidates(store, make_article):
    store.insert(make_article("done", score="50"))
    factory = MagicMock(side_effect=ConfigError("API_KEY is not set"))

    stats = make_engine(store, factory).run()

    assert stats.candidates == 0
    factory.assert_not_called()


def test_provider_factory_errors_stop_the_batch(store, make_article):
    store.insert(make_article("a"))
    factory = MagicMock(side_effect=ConfigError("API_KEY is not set"))

    with pytest.raises(ConfigError):
        make_engine(store, factory).run()
    assert store.get("a").score == ""


def test_provider_factory_is_called_once(store, make_article):
    store.insert(make_article("a", title="Z80 Project"))
    store.insert(make_article("b", title="Smart Lamp", published=NOW - datetime.timedelta(hours=1)))
    provider = ScriptedProvider({}, default="Score: 40")
    factory = MagicMock(return_value=provider)
    engine = make_engine(store, factory)

    stats = engine.run()

    assert stats.scored == 2
    factory.assert_called_once_with()
    assert engine.provider is provider


def test_unparseable_response_is_stored_as_na(store, make_article):
    store.insert(make_article("a", title="Vague"))
    provider = ScriptedProvider({"Vague": "I like it a lot"})

    make_engine(store, provider).run()

    article = store.get("a")
    assert article.score == "N/A"
    assert article.analysis == "I like it a lot"
    # N/A articles are picked up again on the next pass
    assert [a.guid for a in store.select_unscored()] == ["a"]


def test_refresh_pattern_rescores_matching_titles(store, make_article):
    store.insert(make_article("z80", title="Retro Z80", score="40"))
    store.insert(make_article("lamp", title="Smart Lamp", score="10"))
    provider = ScriptedProvider({"Retro": "Score: 88"})

    stats = make_engine(store, provider).run(refresh_pattern="*retro*")

    assert stats.candidates == 1
    assert store.get("z80").score == "88"
    assert store.get("lamp").score == "10"


def test_show_response_prints_raw_text(store, make_article, capsys):
    store.insert(make_article("a", title="Z80"))
    provider = ScriptedProvider({"Z80": "Score: 70 because reasons"})

    make_engine(store, provider).run(show_response=True)

    assert "Score: 70 because reasons" in capsys.readouterr().out


def test_build_provider_requires_api_key():
    with pytest.raises(ConfigError, match="API_KEY"):
        build_provider({"api_key": None, "api_key_env": "API_KEY", "model": "m"})


def test_build_provider():
    provider = build_provider(
        {"api_key": "secret", "model": "gemini-3-flash", "base_url": "https://api.poe.com/v1"}
    )
    assert isinstance(provider, OpenAIProvider)
    assert provider.model == "gemini-3-flash"


def _chat_response(text, tokens=12):
    message = SimpleNamespace(content=text)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message)],
        usage=SimpleNamespace(total_tokens=tokens),
    )


def test_openai_provider_complete():
    provider = OpenAIProvider(api_key="secret", model="test-model")
    provider.client = MagicMock()
    provider.client.chat.completions.create.return_value = _chat_response("Score: 5")

    assert provider.complete("hello") == "Score: 5"

    kwargs = provider.client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["messages"] == [{"role": "user", "content": "hello"}]
    assert provider.get_usage_stats() == {
        "total_tokens": 12,
        "api_calls": 1,
        "model": "test-model",
    }


def test_openai_provider_wraps_api_errors():
    provider = OpenAIProvider(api_key="secret", model="test-model")
    provider.client = MagicMock()
    request = httpx.Request("POST", "https://api.example.com/v1/chat/completions")
    provider.client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

    with pytest.raises(CompletionError):
        provider.complete("hello")


def test_openai_provider_list_models():
    provider = OpenAIProvider(api_key="secret", model="test-model")
    provider.client = MagicMock()
    provider.client.models.list.return_value = [
        SimpleNamespace(id="gemini-3-flash", owned_by="google"),
        SimpleNamespace(id="gpt-4o", owned_by="openai"),
    ]

    assert provider.list_models() == [
        {"id": "gemini-3-flash", "owned_by": "google"},
        {"id": "gpt-4o", "owned_by": "openai"},
    ]
