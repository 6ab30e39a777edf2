"""Request assembly over the generative-AI service.

Hides the design decisions about:
- Which instruction each capability sends and how the output language is chosen
- How an image-only request is phrased
- How structured schedule output is validated

Each method is one suspension point at the network boundary; callers await
it and map failures to user-facing messages.
"""

import logging

from .errors import ExternalServiceError, MissingInputError
from .i18n import language_name
from .llm import ChatSession, ImageInput, StudyModel
from .prompts import load_prompt, render_prompt
from .schedule import SCHEDULE_RESPONSE_SCHEMA, ScheduleData, parse_schedule

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "English"
IMAGE_ONLY_PROMPT = "Please analyze and solve the problem shown in the image."

# Longer answers mean the model ignored the one-word instruction
_MAX_LANGUAGE_NAME_LENGTH = 25


class StudyService:
    """The assistant's four capabilities expressed as model requests."""

    def __init__(self, model: StudyModel) -> None:
        self._model = model

    @property
    def model(self) -> StudyModel:
        return self._model

    async def detect_language(self, prompt: str) -> str:
        """Name the language a prompt is written in.

        Never raises: empty prompts, unusable answers and service failures
        all resolve to English.
        """
        if not prompt.strip():
            return DEFAULT_LANGUAGE

        try:
            response = await self._model.generate_text(
                prompt,
                load_prompt("detect_language").strip(),
                thinking=False,
            )
        except Exception as e:
            logger.warning("Language detection failed: %s", e)
            return DEFAULT_LANGUAGE

        detected = response.content.strip()
        if detected and len(detected) < _MAX_LANGUAGE_NAME_LENGTH:
            logger.debug("Detected language: %s", detected)
            return detected
        logger.debug("Unusable language detection answer %r, using %s", detected[:40], DEFAULT_LANGUAGE)
        return DEFAULT_LANGUAGE

    async def solve_homework(
        self,
        prompt: str,
        image: ImageInput | None = None,
        fallback_locale: str = "en",
    ) -> str:
        """Answer a homework question, optionally about an attached image.

        Args:
            prompt: The question text (may be empty when an image is given)
            image: Optional photo or screenshot of the problem
            fallback_locale: UI locale deciding the answer language when
                there is no text to detect it from

        Raises:
            MissingInputError: If neither prompt nor image is given
        """
        if not prompt and image is None:
            raise MissingInputError("No prompt or image provided.", translation_key="errors.noPrompt")

        language = await self.detect_language(prompt) if prompt else language_name(fallback_locale)
        instruction = render_prompt("solver", language=language)

        response = await self._model.generate_text(
            prompt or IMAGE_ONLY_PROMPT,
            instruction,
            image=image,
        )
        return response.content

    async def create_cheat_sheet(self, solution_text: str, context_prompt: str) -> str:
        """Summarise a solution into key points, formulas and concepts."""
        language = await self.detect_language(context_prompt)
        response = await self._model.generate_text(
            solution_text,
            render_prompt("cheat_sheet", language=language),
        )
        return response.content

    async def generate_practice_problems(self, original_prompt: str, solution_text: str) -> str:
        """Write 2-3 numbered problems similar to the solved one."""
        language = await self.detect_language(original_prompt)
        request = render_prompt("practice_request", question=original_prompt, solution=solution_text)
        response = await self._model.generate_text(
            request,
            render_prompt("practice_problems", language=language),
        )
        return response.content

    async def generate_sketch(self, prompt: str) -> bytes:
        """Draw a textbook-style illustration of a concept."""
        return await self._model.generate_image(render_prompt("sketch", concept=prompt))

    async def edit_sketch(self, image: bytes | ImageInput, instruction: str) -> bytes:
        """Apply an edit instruction to an existing sketch, returning the new image."""
        source = image if isinstance(image, ImageInput) else ImageInput(data=image, mime_type="image/jpeg")
        return await self._model.edit_image(source, instruction)

    async def generate_schedule(self, prompt: str) -> ScheduleData:
        """Plan days and events from a free-form description.

        Raises:
            ScheduleFormatError: If the model output does not match the schema
        """
        language = await self.detect_language(prompt)
        response = await self._model.generate_json(
            prompt,
            render_prompt("schedule", language=language),
            SCHEDULE_RESPONSE_SCHEMA,
        )
        schedule = parse_schedule(response.content)
        logger.info("Generated schedule with %d day(s)", len(schedule))
        return schedule

    def start_tutor_chat(self, language: str) -> ChatSession:
        """Open a tutoring session whose persona answers in ``language``."""
        logger.info("Starting tutor chat in %s", language)
        session = self._model.start_chat(render_prompt("tutor", language=language))
        if session is None:
            raise ExternalServiceError("Could not initialize the tutor chat.")
        return session
