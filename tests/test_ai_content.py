from types import SimpleNamespace

import pytest
from openai import OpenAIError

from campusconnect.core.exceptions import UpstreamServiceError, ValidationError
from campusconnect.schemas.ai import BannerRequest, ColorScheme, DescriptionRequest
from campusconnect.services.ai_content import (
    BannerGenerator,
    DescriptionGenerator,
    PlaceholderImageBackend,
    TextGenerator,
    build_description_prompt,
    parse_color_scheme,
)


class FakeCompletions:

    def __init__(self, content="  Generated text.  ", error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _text_generator(completions):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return TextGenerator(client=client, model="test-model")


def _description_request(**overrides):
    data = {
        "eventTitle": "Robotics Workshop",
        "eventType": "Workshop",
        "keyPoints": ["Hands-on building", "  ", "Free pizza"],
    }
    data.update(overrides)
    return DescriptionRequest(**data)


def test_description_prompt_numbers_key_points():
    prompt = build_description_prompt("T", "Talk", ["First", "Second"], target_audience="Freshmen")

    assert "Event Title: T" in prompt
    assert "Target Audience: Freshmen" in prompt
    assert "1. First\n2. Second" in prompt
    assert "Duration:" not in prompt


def test_generate_description():
    completions = FakeCompletions()
    response = DescriptionGenerator(_text_generator(completions)).generate(_description_request())

    assert response.description == "Generated text."
    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 300
    # Blank key points are dropped before numbering
    assert "2. Free pizza" in call["messages"][0]["content"]


@pytest.mark.parametrize("overrides, message", [
    ({"eventTitle": None}, "eventTitle"),
    ({"eventType": "   "}, "eventType"),
    ({"keyPoints": []}, "keyPoints"),
    ({"keyPoints": ["", " "]}, "At least one valid key point"),
])
def test_description_validation(overrides, message):
    completions = FakeCompletions()
    with pytest.raises(ValidationError, match=message):
        DescriptionGenerator(_text_generator(completions)).generate(_description_request(**overrides))
    assert completions.calls == []


def test_upstream_failure_is_wrapped():
    completions = FakeCompletions(error=OpenAIError("quota exceeded"))
    with pytest.raises(UpstreamServiceError):
        DescriptionGenerator(_text_generator(completions)).generate(_description_request())


def test_empty_completion_is_an_error():
    with pytest.raises(UpstreamServiceError):
        _text_generator(FakeCompletions(content="   ")).complete("p", temperature=0.1, max_tokens=5)


def test_parse_color_scheme():
    assert parse_color_scheme(None) == ColorScheme.PROFESSIONAL
    assert parse_color_scheme("Vibrant") == ColorScheme.VIBRANT
    with pytest.raises(ValidationError):
        parse_color_scheme("neon")


def test_placeholder_backend_url():
    request = BannerRequest(eventTitle="Spring Gala", eventType="Social", description="d")
    url = PlaceholderImageBackend(host="https://placehold.co/").generate("prompt", request, ColorScheme.ACADEMIC)

    assert url == "https://placehold.co/800x450/059669/ffffff?text=Spring%20Gala+%0ASocial&font=montserrat"


def test_generate_banner():
    completions = FakeCompletions(content="A bold purple layout")
    generator = BannerGenerator(_text_generator(completions), PlaceholderImageBackend(host="https://img.test"))
    request = BannerRequest(
        eventTitle="Art Expo", eventType="Exhibition", description="Student art", colorScheme="creative",
    )

    result = generator.generate(request)

    assert result.prompt == "A bold purple layout"
    assert result.image_url.startswith("https://img.test/800x450/7c3aed/")
    assert "creative color scheme" in completions.calls[0]["messages"][0]["content"]


def test_banner_validation():
    generator = BannerGenerator(_text_generator(FakeCompletions()), PlaceholderImageBackend())
    with pytest.raises(ValidationError, match="description"):
        generator.generate(BannerRequest(eventTitle="Art Expo", eventType="Exhibition"))
