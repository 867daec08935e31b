"""
Comprehension Evaluation Module

Sends the text that was read and the user's summary to a language model via
the OpenRouter chat completions API and returns the model's assessment.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from speedreader.utils import logger

OPEN_ROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
API_KEY_ENV_VAR = "OPEN_ROUTER_API_KEY"
DEFAULT_MODEL = "deepseek/deepseek-r1:free"
REQUEST_TIMEOUT = 120


class EvaluationError(Exception):
    """Raised when the evaluation could not be obtained."""


@dataclass
class EvaluationResult:
    """The model's verdict on a summary."""

    model: str
    content: str


def create_evaluation_prompt(summary: str, text: str, wpm: int) -> str:
    """Build the grading prompt for a summary of ``text`` read at ``wpm``."""
    return f'''
Original Text:
"""
{text}
"""

User Summary:
"""
{summary}
"""

WPM: {wpm}

Based on the Original Text, please evaluate the User Summary. Assess its comprehension based on:
1. Accuracy: Does the summary correctly represent the information in the original text?
2. Key Points Coverage: Does the summary include the main ideas and crucial supporting details?
3. Completeness: How much of the core information is captured?
4. Misinterpretations: Are there any points that are clearly misunderstood?

Provide:
- A qualitative rating (e.g., Excellent, Good, Fair, Poor).
- A list of key points correctly captured in the summary.
- A list of significant points from the original text that were missed or misrepresented in the summary.
- A brief overall comment on the user's comprehension based on their WPM.
'''


def get_api_key() -> str:
    """
    Read the OpenRouter API key from the environment.

    Raises:
        EvaluationError: If the variable is unset or blank
    """
    api_key = os.environ.get(API_KEY_ENV_VAR)
    if api_key is None:
        raise EvaluationError(f"{API_KEY_ENV_VAR} environment variable is not set")
    if not api_key.strip():
        raise EvaluationError(f"{API_KEY_ENV_VAR} environment variable is set but empty")
    return api_key.strip()


def parse_response(data: Any) -> str:
    """
    Extract the assistant message from a chat completions payload.

    Raises:
        EvaluationError: If the payload lacks choices or message content
    """
    if not isinstance(data, dict) or data.get("choices") is None:
        raise EvaluationError("Missing choices in API response")

    choices = data["choices"]
    if not choices:
        raise EvaluationError("Empty choices array in API response")

    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(message, dict) or not isinstance(message.get("content"), str):
        raise EvaluationError("Missing message content in API response")

    return message["content"]


class EvaluationClient:
    """Client for the OpenRouter chat completions endpoint."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: Optional[str] = None,
        url: str = OPEN_ROUTER_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the evaluation client.

        Args:
            model: OpenRouter model identifier
            api_key: API key, read from OPEN_ROUTER_API_KEY when omitted
            url: Chat completions endpoint
            timeout: Request timeout in seconds
            session: requests session to reuse
        """
        self.model = model
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def _build_body(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }

    def evaluate(self, text: str, summary: str, wpm: int) -> EvaluationResult:
        """
        Ask the model to grade ``summary`` against ``text``.

        Makes a single request; there is no retry.

        Raises:
            EvaluationError: On a missing key, network failure, error status
                or malformed response
        """
        api_key = self.api_key or get_api_key()
        prompt = create_evaluation_prompt(summary, text, wpm)

        with logger.status("Sending request to AI for evaluation...") as spinner:
            try:
                response = self.session.post(
                    self.url,
                    headers={
                        "Authorization": f"Bearer {api_key}",
                        "Content-Type": "application/json",
                    },
                    json=self._build_body(prompt),
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                raise EvaluationError(f"API request failed: {e}") from e

            if not response.ok:
                raise EvaluationError(f"API request failed: {response.text}")

            spinner.update("[info]Parsing AI response...[/info]")
            try:
                data = response.json()
            except ValueError as e:
                raise EvaluationError(f"API returned invalid JSON: {e}") from e

        return EvaluationResult(model=self.model, content=parse_response(data))
