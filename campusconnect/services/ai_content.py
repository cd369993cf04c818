"""
AI content generators for event authoring.

Both generators are stateless request builders around a chat-completions
client (OpenAI or Azure OpenAI). The banner generator hands its prompt to an
``ImageBackend``; the default backend returns a placeholder image URL.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Protocol
from urllib.parse import quote

from openai import AzureOpenAI, OpenAI, OpenAIError

from campusconnect.core.config import settings
from campusconnect.core.exceptions import UpstreamServiceError, ValidationError
from campusconnect.schemas.ai import (
    BannerRequest,
    BannerResult,
    ColorScheme,
    DescriptionRequest,
    DescriptionResponse,
)

logger = logging.getLogger(__name__)

DESCRIPTION_TEMPERATURE = 0.7
DESCRIPTION_MAX_TOKENS = 300
BANNER_PROMPT_MAX_TOKENS = 800

COLOR_SCHEME_HEX = {
    ColorScheme.PROFESSIONAL: "2563eb",  # Blue
    ColorScheme.VIBRANT: "dc2626",       # Red
    ColorScheme.ACADEMIC: "059669",      # Green
    ColorScheme.CREATIVE: "7c3aed",      # Purple
}


def create_ai_client():
    """Build the chat client from settings; raises if no credential is configured."""
    if settings.AZURE_OPENAI_ENDPOINT and settings.AZURE_OPENAI_API_KEY:
        return AzureOpenAI(
            azure_endpoint=settings.AZURE_OPENAI_ENDPOINT,
            api_key=settings.AZURE_OPENAI_API_KEY,
            api_version=settings.AZURE_OPENAI_API_VERSION,
        )
    if settings.OPENAI_API_KEY:
        return OpenAI(api_key=settings.OPENAI_API_KEY)
    logger.error("No OpenAI or Azure OpenAI credentials configured")
    raise UpstreamServiceError("AI service not configured properly")


def default_model_name() -> str:
    if settings.AZURE_OPENAI_ENDPOINT and settings.AZURE_OPENAI_API_KEY:
        return settings.AZURE_OPENAI_DEPLOYMENT_NAME
    return settings.OPENAI_MODEL


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _required(value: Optional[str], field_name: str, message: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(message, field_name=field_name)
    return value


class TextGenerator:
    """Thin wrapper so every generator calls the model the same way."""

    def __init__(self, client=None, model: Optional[str] = None):
        self._client = client
        self.model = model or default_model_name()

    @property
    def client(self):
        if self._client is None:
            self._client = create_ai_client()
        return self._client

    def complete(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        client = self.client
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"Text generation failed: {str(e)}")
            raise UpstreamServiceError("Failed to generate content. Please try again.", details=str(e))

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise UpstreamServiceError("The AI service returned an empty response")
        return content.strip()


# ---------------------------------------------------------------------------
# Descriptions
# ---------------------------------------------------------------------------

def build_description_prompt(
    title: str,
    event_type: str,
    key_points: List[str],
    target_audience: Optional[str] = None,
    duration: Optional[str] = None,
    location: Optional[str] = None,
) -> str:
    lines = [
        "Create a compelling and professional event description for a campus event with the following details:",
        "",
        f"Event Title: {title}",
        f"Event Type: {event_type}",
    ]
    if target_audience:
        lines.append(f"Target Audience: {target_audience}")
    if duration:
        lines.append(f"Duration: {duration}")
    if location:
        lines.append(f"Location: {location}")
    lines += ["", "Key Points to Include:"]
    lines += [f"{index}. {point}" for index, point in enumerate(key_points, start=1)]
    lines += [
        "",
        "Please generate a well-structured, engaging description that:",
        "- Is approximately 100-200 words",
        "- Captures the essence of the event",
        "- Highlights the key benefits for attendees",
        "- Uses professional yet accessible language",
        "- Includes a clear call-to-action",
        "- Is suitable for a university campus event platform",
        "",
        "The description should be informative, exciting, and encourage student participation.",
    ]
    return "\n".join(lines)


class DescriptionGenerator:

    def __init__(self, text_generator: Optional[TextGenerator] = None):
        self.text_generator = text_generator or TextGenerator()

    def generate(self, request: DescriptionRequest) -> DescriptionResponse:
        title = _required(request.event_title, "eventTitle", "Missing required field: eventTitle")
        event_type = _required(request.event_type, "eventType", "Missing required field: eventType")
        if not request.key_points:
            raise ValidationError("Missing required field: keyPoints", field_name="keyPoints")

        key_points = [point.strip() for point in request.key_points if point and point.strip()]
        if not key_points:
            raise ValidationError("At least one valid key point is required", field_name="keyPoints")

        prompt = build_description_prompt(
            title.strip(), event_type.strip(), key_points,
            target_audience=request.target_audience,
            duration=request.duration,
            location=request.location,
        )
        logger.info(f"Generating description for event '{title}'")
        description = self.text_generator.complete(
            prompt, temperature=DESCRIPTION_TEMPERATURE, max_tokens=DESCRIPTION_MAX_TOKENS
        )
        return DescriptionResponse(description=description, generated_at=_utcnow())


# ---------------------------------------------------------------------------
# Banners
# ---------------------------------------------------------------------------

class ImageBackend(Protocol):
    def generate(self, prompt: str, request: BannerRequest, color_scheme: ColorScheme) -> str:
        """Return a public URL for a banner rendered from ``prompt``."""
        ...


class PlaceholderImageBackend:
    """Deterministic placehold.co URL; swap for a real image API behind the same call."""

    def __init__(self, host: Optional[str] = None, size: str = "800x450", text_color: str = "ffffff"):
        self.host = (host or settings.BANNER_PLACEHOLDER_HOST).rstrip("/")
        self.size = size
        self.text_color = text_color

    def generate(self, prompt: str, request: BannerRequest, color_scheme: ColorScheme) -> str:
        title = quote(request.event_title or "", safe="")
        category = quote(request.event_type or "", safe="")
        background = COLOR_SCHEME_HEX.get(color_scheme, COLOR_SCHEME_HEX[ColorScheme.PROFESSIONAL])
        return f"{self.host}/{self.size}/{background}/{self.text_color}?text={title}+%0A{category}&font=montserrat"


def parse_color_scheme(value: Optional[str]) -> ColorScheme:
    if value is None or not value.strip():
        return ColorScheme.PROFESSIONAL
    try:
        return ColorScheme(value.strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in ColorScheme)
        raise ValidationError(f"Invalid colorScheme: must be one of {allowed}", field_name="colorScheme")


def build_banner_prompt(request: BannerRequest, color_scheme: ColorScheme) -> str:
    details = [
        f"- Title: {request.event_title}",
        f"- Type: {request.event_type}",
        f"- Description: {request.description}",
    ]
    if request.location:
        details.append(f"- Location: {request.location}")
    if request.date:
        details.append(f"- Date: {request.date}")
    details.append(f"- Color Scheme: {color_scheme.value}")

    return "\n".join([
        "Create a detailed visual description for a professional event banner design with the following specifications:",
        "",
        "Event Details:",
        *details,
        "",
        "Please generate a comprehensive design description that includes:",
        "1. Layout composition and text hierarchy",
        "2. Color palette and visual style",
        "3. Typography suggestions",
        "4. Graphic elements and imagery",
        "5. Overall aesthetic that appeals to university students",
        "6. Specific placement of event title, date, and key information",
        "",
        "The banner should be:",
        "- Modern and eye-catching",
        "- Suitable for digital display (16:9 or 4:3 aspect ratio)",
        "- Professional yet engaging for a campus audience",
        "- Clear and readable from a distance",
        f"- Reflecting the {color_scheme.value} color scheme",
        "",
        "Focus on creating a design that would work well for a university campus event platform.",
        "Provide the description in a format suitable for AI image generation tools.",
    ])


class BannerGenerator:

    def __init__(self, text_generator: Optional[TextGenerator] = None, image_backend: Optional[ImageBackend] = None):
        self.text_generator = text_generator or TextGenerator()
        self.image_backend = image_backend or PlaceholderImageBackend()

    def validate(self, request: BannerRequest) -> ColorScheme:
        _required(request.event_title, "eventTitle", "Missing required field: eventTitle")
        _required(request.event_type, "eventType", "Missing required field: eventType (category)")
        _required(request.description, "description", "Missing required field: description")
        return parse_color_scheme(request.color_scheme)

    def generate(self, request: BannerRequest) -> BannerResult:
        color_scheme = self.validate(request)

        logger.info(f"Generating banner for event '{request.event_title}' ({color_scheme.value})")
        design_prompt = build_banner_prompt(request, color_scheme)
        banner_prompt = self.text_generator.complete(
            design_prompt, temperature=DESCRIPTION_TEMPERATURE, max_tokens=BANNER_PROMPT_MAX_TOKENS
        )
        image_url = self.image_backend.generate(banner_prompt, request, color_scheme)
        return BannerResult(prompt=banner_prompt, image_url=image_url, generated_at=_utcnow())
