# utils/ai_lookup.py
import json
import logging

import anthropic

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-3-5-haiku-latest"


class PassageLookup:
    """
    Asks an LLM which passage a free-text question is about.

    The model only proposes a citation string ("Juan 3:16"); the caller runs
    it through the reference parser like any typed input, so a hallucinated
    book is rejected the same way a typo is.
    """

    def __init__(self, client=None, api_key=None, model=DEFAULT_MODEL):
        self._client = client
        self.api_key = api_key
        self.model = model

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise ValueError("ANTHROPIC_API_KEY is not configured")
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def build_prompt(self, query, book_names):
        return f"""Analiza la siguiente consulta e identifica el pasaje bíblico al que se refiere.
        Consulta: "{query}"

        Usa SOLO uno de estos nombres de libro: {', '.join(book_names)}.

        Responde ÚNICAMENTE con un objeto JSON con la clave "reference" y la cita en el formato "Libro Capítulo" o "Libro Capítulo:Versículo" o "Libro Capítulo:Inicio-Fin".
        Ejemplo: {{"reference": "Juan 3:16"}}

        Si la consulta no se refiere claramente a un pasaje, responde: {{"reference": null}}
        """

    def suggest_reference(self, query, book_names):
        """Return a citation string, or None when the model can't name one."""
        logger.info(f"Sending passage lookup prompt for query: '{query}'")

        message = self.client.messages.create(
            model=self.model,
            max_tokens=100,
            temperature=0.0,
            messages=[
                {
                    "role": "user",
                    "content": self.build_prompt(query, book_names)
                }
            ]
        )

        response_text = message.content[0].text.strip()
        logger.info(f"Received passage lookup response: {response_text}")

        # The answer is sometimes wrapped in ```json ... ```
        if response_text.startswith('```'):
            response_text = response_text.strip('`')
            if response_text.startswith('json'):
                response_text = response_text[len('json'):]
            response_text = response_text.strip()

        try:
            data = json.loads(response_text)
        except json.JSONDecodeError:
            logger.error(f"Failed to parse passage lookup response: {response_text}")
            return None

        if not isinstance(data, dict):
            return None
        reference = data.get('reference')
        if not isinstance(reference, str) or not reference.strip():
            return None
        return reference.strip()
