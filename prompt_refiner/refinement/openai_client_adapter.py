import httpx
import openai

from prompt_refiner.logging.logger import Log
from prompt_refiner.refinement.client_base import BaseCompletionClient
from prompt_refiner.refinement.exceptions import (
    GatewayConfigurationError,
    GatewayError,
    GatewayNetworkError,
    GatewayQuotaError,
    GatewayRateLimitError,
)


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client built on an OpenAI-compatible chat completions API.

    Requests are sent exactly once; the SDK's retry loop is disabled.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        if not api_key:
            raise GatewayConfigurationError("Gateway API key is not configured")
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        content: list[dict[str, object]],
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                n=1,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": content},
                ],
            )
        except openai.RateLimitError as exc:
            Log.error(f"AI gateway error: 429 {exc}")
            raise GatewayRateLimitError(
                "Rate limit exceeded. Please try again later.", status_code=429
            ) from exc
        except openai.APIStatusError as exc:
            Log.error(f"AI gateway error: {exc.status_code} {exc}")
            if exc.status_code == 402:
                raise GatewayQuotaError(
                    "Payment required. Please add credits.", status_code=402
                ) from exc
            raise GatewayError(
                f"AI gateway error: {exc.status_code}", status_code=exc.status_code
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            Log.error(f"AI gateway unreachable: {exc}")
            raise GatewayNetworkError(f"AI gateway network error: {exc}") from exc
        except openai.APIError as exc:
            Log.error(f"AI gateway error: {exc}")
            raise GatewayError(f"AI gateway error: {exc}") from exc

        if not response.choices:
            raise GatewayError("No response from AI")
        text = response.choices[0].message.content
        if not text:
            raise GatewayError("No response from AI")
        return text
