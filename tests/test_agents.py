"""Tests for the idea mappers: prompts, normalization and defaults."""

import json

import pytest
from unittest.mock import patch

from agents import (
    generate_ideas,
    verify_idea,
    generate_blueprint,
    translate_idea,
    generate_contract_code,
    to_display_string,
)
from agents.generator_agent import GeneratorAgent, parse_degen_score
from agents.verifier_agent import UNAVAILABLE_NOTES
from contracts import (
    Ecosystem,
    ForgeConfig,
    ForgeMode,
    Idea,
    IdeaStatus,
    Language,
    Sector,
)
from providers.errors import (
    HttpFailure,
    InvalidResponseShape,
    MissingCredential,
    TransportError,
    UnparsableResponse,
)


def _idea(**fields) -> Idea:
    base = dict(
        id="idea-1",
        title="Yield Loom",
        tagline="Weave your yield",
        description="Auto-compounding vaults",
        ecosystem="Solana",
        sector="DeFi",
        degen_score=40,
        features=["vaults", "points"],
    )
    base.update(fields)
    return Idea(**base)


def _raw_ideas(k: int) -> str:
    scores = [12, "77", 150, -5, None]
    return json.dumps([
        {
            "title": f"Idea {i}",
            "tagline": "t",
            "description": "d",
            "ecosystem": "Base",
            "sector": "NFT",
            "degenScore": scores[i % len(scores)],
            "features": ["a", "b"],
        }
        for i in range(k)
    ])


class TestGenerateIdeas:
    """generate_ideas shapes an array into GENERATED ideas."""

    @pytest.mark.parametrize("k", [1, 2, 3, 4, 5])
    def test_returns_exactly_quantity(self, scripted, k):
        provider = scripted(_raw_ideas(k))
        ideas = generate_ideas(ForgeConfig(quantity=k), Language.EN, provider=provider)
        assert len(ideas) == k
        assert len({idea.id for idea in ideas}) == k
        for idea in ideas:
            assert idea.status == IdeaStatus.GENERATED
            assert 0 <= idea.degen_score <= 100
            assert idea.language == "en"

    def test_huge_degen_score_is_clamped(self, scripted):
        reply = '[{"title": "x", "degenScore": 1' + "0" * 400 + "}]"
        ideas = generate_ideas(ForgeConfig(quantity=1), provider=scripted(reply))
        assert ideas[0].degen_score == 100

    def test_extra_ideas_are_truncated(self, scripted):
        ideas = generate_ideas(ForgeConfig(quantity=2), provider=scripted(_raw_ideas(4)))
        assert [idea.title for idea in ideas] == ["Idea 0", "Idea 1"]

    def test_defaults_for_missing_fields(self, scripted):
        provider = scripted('```json\n[{"features": "not a list"}, 42]\n```')
        ideas = generate_ideas(ForgeConfig(quantity=2), Language.RU, provider=provider)
        assert len(ideas) == 1
        idea = ideas[0]
        assert idea.title == "Untitled Idea"
        assert idea.tagline == ""
        assert idea.description == ""
        assert idea.ecosystem == "Unknown"
        assert idea.sector == "Unspecified"
        assert idea.degen_score == 50
        assert idea.features == []
        assert idea.language == "ru"

    def test_object_instead_of_array(self, scripted):
        with pytest.raises(InvalidResponseShape) as exc:
            generate_ideas(ForgeConfig(), provider=scripted('{"title": "solo"}'))
        assert exc.value.code == "INVALID_RESPONSE"

    def test_unparsable_reply_propagates(self, scripted):
        provider = scripted("I cannot help with that.")
        with pytest.raises(UnparsableResponse):
            generate_ideas(ForgeConfig(), provider=provider)
        assert len(provider.calls) == 1

    def test_sampling_parameters(self, scripted):
        provider = scripted("[]")
        generate_ideas(ForgeConfig(), provider=provider)
        assert provider.calls[0]["temperature"] == 0.8
        assert provider.calls[0]["max_tokens"] == 1400

    def test_targeted_prompt(self, scripted):
        config = ForgeConfig(
            mode=ForgeMode.TARGETED,
            ecosystems=[Ecosystem.TON, Ecosystem.MONAD],
            sectors=[Sector.GAMEFI],
            quantity=2,
            degen_level=85,
            user_context="telegram mini apps",
        )
        provider = scripted("[]")
        generate_ideas(config, Language.ZH_CN, provider=provider)
        system, user = provider.calls[0]["messages"]
        assert system["role"] == "system"
        assert "JSON array" in system["content"]
        assert user["role"] == "user"
        for fragment in ("TON, Monad", "GameFi", "risk level 85", "telegram mini apps", "Simplified Chinese"):
            assert fragment in user["content"]

    def test_random_prompt(self, scripted):
        prompt = GeneratorAgent(provider=scripted()).build_prompt(
            ForgeConfig(mode=ForgeMode.RANDOM, quantity=4), Language.EN
        )
        assert "Generate 4 chaotic Web3 ideas" in prompt
        assert "Solana" not in prompt

    def test_missing_context_is_none(self, scripted):
        prompt = GeneratorAgent(provider=scripted()).build_prompt(ForgeConfig(), "en")
        assert "Additional context: None." in prompt


class TestParseDegenScore:

    @pytest.mark.parametrize("value,expected", [
        (0, 0),
        (42, 42),
        (42.6, 43),
        ("64", 64),
        (" 12.2 ", 12),
        (250, 100),
        (-3, 0),
        (10 ** 400, 100),
        (-(10 ** 400), 0),
        ("1" + "0" * 400, 50),
        (None, 50),
        ("spicy", 50),
        (True, 50),
        (float("nan"), 50),
        ([10], 50),
    ])
    def test_values(self, value, expected):
        assert parse_degen_score(value) == expected


class TestVerifyIdea:

    def test_full_result(self, scripted):
        reply = json.dumps({
            "isUnique": False,
            "similarProjects": [
                {"name": "Kamino", "url": "https://kamino.finance", "description": "vaults"},
                "Tulip",
                {"url": "https://no-name.example"},
            ],
            "notes": "Crowded space",
            "pivotSuggestion": "Focus on LST loops",
        })
        provider = scripted(reply)
        result = verify_idea(_idea(), Language.EN, provider=provider)
        assert result.is_unique is False
        assert [p.name for p in result.similar_projects] == ["Kamino", "Tulip"]
        assert result.similar_projects[0].url == "https://kamino.finance"
        assert result.notes == "Crowded space"
        assert result.pivot_suggestion == "Focus on LST loops"
        assert provider.calls[0]["temperature"] == 0.2
        assert provider.calls[0]["max_tokens"] == 800

    def test_defaults(self, scripted):
        result = verify_idea(_idea(), provider=scripted("Result: {}"))
        assert result.is_unique is True
        assert result.similar_projects == []
        assert result.notes == ""
        assert result.pivot_suggestion is None

    def test_prompt_embeds_idea(self, scripted):
        provider = scripted("{}")
        verify_idea(_idea(), Language.ZH_TW, provider=provider)
        user = provider.calls[0]["messages"][1]["content"]
        assert "Yield Loom" in user
        assert "Auto-compounding vaults" in user
        assert "Solana" in user
        assert "Traditional Chinese" in user

    def test_failure_propagates_by_default(self, scripted):
        with pytest.raises(HttpFailure):
            verify_idea(_idea(), provider=scripted(HttpFailure(503, "down")))

    def test_best_effort_fallback(self, scripted):
        result = verify_idea(_idea(), provider=scripted(TransportError("reset")), best_effort=True)
        assert result.is_unique is True
        assert result.similar_projects == []
        assert result.notes == UNAVAILABLE_NOTES

    def test_best_effort_on_unparsable(self, scripted):
        result = verify_idea(_idea(), provider=scripted("no json"), best_effort=True)
        assert result.notes == UNAVAILABLE_NOTES

    def test_best_effort_never_hides_missing_credential(self, clean_env):
        with pytest.raises(MissingCredential):
            verify_idea(_idea(), best_effort=True)


class TestGenerateBlueprint:

    def test_nested_values_become_text(self, scripted):
        reply = json.dumps({
            "overview": "A vault protocol",
            "tokenomics": {"team": "15%", "community": "60%"},
            "roadmap": ["Phase 1", "Phase 2"],
            "technicalArchitecture": "Anchor programs",
        })
        blueprint = generate_blueprint(_idea(), provider=scripted(reply))
        assert blueprint.overview == "A vault protocol"
        assert json.loads(blueprint.tokenomics) == {"team": "15%", "community": "60%"}
        assert "\n" in blueprint.tokenomics
        assert json.loads(blueprint.roadmap) == ["Phase 1", "Phase 2"]
        assert blueprint.contract_code is None
        assert blueprint.frontend_snippet is None
        assert blueprint.deployment_url is None

    def test_optional_fields_included_when_present(self, scripted):
        reply = json.dumps({
            "overview": "o", "tokenomics": "t", "roadmap": "r", "technicalArchitecture": "a",
            "contractCode": "contract X {}", "deploymentUrl": "ipfs://abc", "frontendSnippet": "",
        })
        blueprint = generate_blueprint(_idea(), provider=scripted(reply))
        assert blueprint.contract_code == "contract X {}"
        assert blueprint.deployment_url == "ipfs://abc"
        assert blueprint.frontend_snippet is None

    def test_missing_sections_are_empty(self, scripted):
        blueprint = generate_blueprint(_idea(), provider=scripted('{"overview": null}'))
        assert blueprint.overview == ""
        assert blueprint.technical_architecture == ""

    def test_array_reply_rejected(self, scripted):
        with pytest.raises(InvalidResponseShape):
            generate_blueprint(_idea(), provider=scripted("[1, 2]"))


class TestTranslateIdea:

    def test_overlay(self, scripted):
        reply = json.dumps({
            "title": "Ткацкий станок",
            "tagline": "Плетите доход",
            "description": "Автокомпаундинг",
            "features": ["хранилища"],
        })
        original = _idea(status=IdeaStatus.VERIFIED)
        translated = translate_idea(original, Language.RU, provider=scripted(reply))
        assert translated.title == "Ткацкий станок"
        assert translated.features == ["хранилища"]
        assert translated.language == "ru"
        assert translated.id == original.id
        assert translated.status == IdeaStatus.VERIFIED
        assert translated.degen_score == original.degen_score

    def test_missing_features_keep_original(self, scripted):
        original = _idea()
        translated = translate_idea(original, "zh-CN", provider=scripted('{"title": "织机"}'))
        assert translated.features == original.features
        assert translated.tagline == original.tagline
        assert translated.description == original.description
        assert translated.title == "织机"

    def test_original_untouched(self, scripted):
        original = _idea()
        translate_idea(original, "ru", provider=scripted('{"title": "X", "features": ["y"]}'))
        assert original.title == "Yield Loom"
        assert original.features == ["vaults", "points"]
        assert original.language is None


class TestGenerateContractCode:

    def test_returns_raw_text(self, scripted):
        code = "```solidity\ncontract YieldLoom {}\n```"
        provider = scripted(code)
        assert generate_contract_code(_idea(), provider=provider) == code
        assert provider.calls[0]["max_tokens"] == 400
        assert "Yield Loom" in provider.calls[0]["messages"][1]["content"]


class TestMissingCredential:
    """Every mapper fails before any network call when no key resolves."""

    @pytest.mark.parametrize("call", [
        lambda: generate_ideas(ForgeConfig()),
        lambda: verify_idea(_idea()),
        lambda: generate_blueprint(_idea()),
        lambda: translate_idea(_idea(), "ru"),
        lambda: generate_contract_code(_idea()),
    ])
    def test_fails_closed(self, clean_env, call):
        with patch("openai.OpenAI") as mock_openai:
            with pytest.raises(MissingCredential):
                call()
        mock_openai.assert_not_called()


class TestToDisplayString:

    def test_values(self):
        assert to_display_string("x") == "x"
        assert to_display_string(None) == ""
        assert to_display_string(3) == "3"
        assert to_display_string({"a": 1}) == '{\n  "a": 1\n}'
