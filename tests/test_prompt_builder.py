"""Tests for prompt and schema construction."""

from campaign_proxy.core.schemas import SEND_TIME_PATTERN, AudienceCategory
from campaign_proxy.prompting import prompt_builder


def test_format_categories_preserves_order():
    categories = [
        AudienceCategory(id="A", name_fa="الف", name_en="sports"),
        AudienceCategory(id="B", name_fa="ب", name_en="books"),
    ]

    assert prompt_builder.format_categories(categories) == (
        'ID: "A", Name: "الف", Description: Members interested in sports; '
        'ID: "B", Name: "ب", Description: Members interested in books'
    )


def test_campaign_prompt_embeds_goal_and_ids():
    categories = [AudienceCategory(id="A", name_fa="..", name_en="..")]

    prompt, system_instruction = prompt_builder.build_campaign_prompt("announce a sale", categories)

    assert prompt.startswith('User Goal: "announce a sale"')
    assert 'ID: "A"' in prompt
    assert "JSON" in system_instruction
    assert "{{firstName}}" in system_instruction


def test_campaign_schema_requires_every_field():
    schema = prompt_builder.CAMPAIGN_RESPONSE_SCHEMA

    assert set(schema["required"]) == set(schema["properties"])
    assert schema["properties"]["sendTime"]["pattern"] == SEND_TIME_PATTERN


def test_subject_prompt():
    prompt, system_instruction = prompt_builder.build_subject_prompt("متن ایمیل")

    assert prompt == 'Email Body: "متن ایمیل"'
    assert "3 diverse" in system_instruction


def test_free_text_prompts_quote_user_input():
    assert '"Hi {{firstName}}"' in prompt_builder.build_improve_body_prompt("Hi {{firstName}}")
    assert '"young parents"' in prompt_builder.build_send_time_prompt("young parents")
