"""Generative-service client for project metadata and outreach drafts.

Talks to any OpenAI-compatible chat endpoint (Gemini by default). Neither
call raises: failures come back as an ``AssistResult`` with ``fallback`` set.
Results are never written to the registry here; callers apply them.
"""
import base64
from textwrap import dedent

from openai import OpenAI
from pydantic import ValidationError

from approveflow.core.config import settings
from approveflow.core.logging import logger
from approveflow.schemas.assist import AssistResult, EmailPurpose, ImageDescription

FALLBACK_DESCRIPTION = ImageDescription(title="New Project", summary="Asset uploaded for review.")
EMPTY_EMAIL_TEXT = "Could not generate email."
EMAIL_ERROR_TEXT = "Error generating email. Please check API key."

DESCRIBE_PROMPT = (
    "Analyze this image. Suggest a short, professional project title (max 5 words) "
    "and a 1-sentence summary of what it is (e.g., 'Modern minimalist logo design for "
    'tech startup\'). Return JSON with the keys "title" and "summary".'
)

EMAIL_WORD_LIMITS = {
    EmailPurpose.initial: 100,
    EmailPurpose.followup: 80,
    EmailPurpose.approval_thanks: 50,
}


def build_email_prompt(client_name: str, project_name: str, purpose: EmailPurpose) -> str:
    limit = EMAIL_WORD_LIMITS[purpose]
    if purpose is EmailPurpose.initial:
        body = f"""
            Write a short, professional, and friendly email to a client named "{client_name}".
            I am sending them a link to review the project "{project_name}".
            The goal is to get them to click the link and approve it or leave feedback.
            Keep it under {limit} words. Do not include subject line placeholders. Just the body.
            Tone: Efficient but warm.
        """
    elif purpose is EmailPurpose.followup:
        body = f"""
            Write a polite but firm follow-up email to "{client_name}" regarding project "{project_name}".
            They haven't approved it yet. Remind them that approval is needed to move forward (or finalize payment).
            Keep it under {limit} words.
            Tone: Professional urgency.
        """
    else:
        body = f"""
            Write a very short thank you note to "{client_name}" for approving "{project_name}".
            Mention that the final files will be sent shortly (or invoice).
            Keep it under {limit} words.
        """
    return dedent(body).strip()


def build_client(api_key: str | None = None, base_url: str | None = None) -> OpenAI:
    # a missing key still yields a client; calls fail and fall back
    return OpenAI(
        api_key=api_key or settings.GENAI_API_KEY or "missing-key",
        base_url=base_url or settings.GENAI_BASE_URL,
        max_retries=0,
    )


def _first_text(response) -> str:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    return (choices[0].message.content or "").strip()


class MetadataAssistant:
    def __init__(self, client=None, text_model: str | None = None, vision_model: str | None = None):
        self.client = client if client is not None else build_client()
        self.text_model = text_model or settings.GENAI_TEXT_MODEL
        self.vision_model = vision_model or settings.GENAI_VISION_MODEL

    def describe_image(self, image_bytes: bytes, mime_type: str) -> AssistResult[ImageDescription]:
        data_url = f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('ascii')}"
        try:
            response = self.client.chat.completions.create(
                model=self.vision_model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "image_url", "image_url": {"url": data_url}},
                            {"type": "text", "text": DESCRIBE_PROMPT},
                        ],
                    }
                ],
                response_format={"type": "json_object"},
            )
            text = _first_text(response)
            if not text:
                raise ValueError("No response")
            description = ImageDescription.model_validate_json(text)
        except (ValidationError, ValueError) as e:
            logger.warning("describe_image_unparseable", model=self.vision_model, error=str(e))
            return AssistResult[ImageDescription](value=FALLBACK_DESCRIPTION.model_copy(), fallback=True, error=str(e))
        except Exception as e:
            logger.exception("describe_image_failed", model=self.vision_model, error=str(e))
            return AssistResult[ImageDescription](value=FALLBACK_DESCRIPTION.model_copy(), fallback=True, error=str(e))

        logger.info("describe_image_ok", model=self.vision_model, title=description.title)
        return AssistResult[ImageDescription](value=description)

    def draft_email(self, client_name: str, project_name: str, purpose: EmailPurpose | str) -> AssistResult[str]:
        purpose = EmailPurpose(purpose)
        prompt = build_email_prompt(client_name, project_name, purpose)
        try:
            response = self.client.chat.completions.create(
                model=self.text_model,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            logger.exception("draft_email_failed", model=self.text_model, purpose=purpose.value, error=str(e))
            return AssistResult[str](value=EMAIL_ERROR_TEXT, fallback=True, error=str(e))

        text = _first_text(response)
        if not text:
            logger.warning("draft_email_empty", model=self.text_model, purpose=purpose.value)
            return AssistResult[str](value=EMPTY_EMAIL_TEXT, fallback=True, error="empty response")
        return AssistResult[str](value=text)
