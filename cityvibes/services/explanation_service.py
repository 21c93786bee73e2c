"""Short natural-language explanation of why a place fits a mood."""
import logging
from typing import Optional

from cityvibes.models import Place
from cityvibes.models.lexicon import tone_for_mood
from cityvibes.services.semantic_translator import TextCompletionProvider
from cityvibes.metrics import EXPLANATIONS_TOTAL

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "Eres VibeTranslator 3000, un asistente que explica lugares según el mood "
    "del usuario con el tono apropiado."
)

EXPLANATION_PROMPT = """Usa el tono {tone} para explicar en ≤60 palabras por qué {name} es ideal para la vibra "{mood}".

Contexto del lugar:
- Nombre: {name}
- Categoría: {category}
- Ciudad: {city}
- Tags: {tags}
- Rating: {rating}
- Precio: {price_level}

Incluye **un** emoji coherente al final, nada más. Responde solo en español con modismos suaves."""

MAX_EXPLANATION_WORDS = 60


def template_explanation(place: Place, mood: str) -> str:
    return f"{place.name} es perfecto para tu vibra {mood} 🔥"


class ExplanationService:
    """Generates explanations with the LLM, falling back to a fixed template."""

    def __init__(
        self,
        completion_provider: Optional[TextCompletionProvider] = None,
        model: Optional[str] = None,
        enabled: bool = True,
    ):
        self.completion_provider = completion_provider
        self.model = model
        self.enabled = enabled

    async def explain(self, place: Place, mood: str) -> str:
        """Explain why a place matches a mood. Never raises.

        Args:
            place: Recommended place
            mood: User mood phrase

        Returns:
            LLM text in the mood's tone, or the template sentence
        """
        if not self.enabled or self.completion_provider is None:
            EXPLANATIONS_TOTAL.labels(source="template").inc()
            return template_explanation(place, mood)

        tone = tone_for_mood(mood)
        prompt = EXPLANATION_PROMPT.format(
            tone=tone,
            name=place.name,
            mood=mood,
            category=place.category,
            city=place.city,
            tags=", ".join(place.tags),
            rating=place.rating,
            price_level=place.price_level,
        )

        try:
            text = await self.completion_provider.complete(
                prompt,
                system_prompt=SYSTEM_PROMPT,
                model=self.model,
                max_tokens=100,
                temperature=0.7,
                endpoint="explain",
            )
        except Exception as e:
            logger.warning(f"[ExplanationService] LLM explanation failed for {place.name!r}: {e}")
            EXPLANATIONS_TOTAL.labels(source="template").inc()
            return template_explanation(place, mood)

        text = (text or "").strip()
        if not text:
            EXPLANATIONS_TOTAL.labels(source="template").inc()
            return template_explanation(place, mood)

        words = text.split()
        if len(words) > MAX_EXPLANATION_WORDS:
            text = " ".join(words[:MAX_EXPLANATION_WORDS])

        EXPLANATIONS_TOTAL.labels(source="llm").inc()
        return text
