from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        content: list[dict[str, object]],
    ) -> str:
        """Return the raw completion text.

        Raises:
            GatewayError: or one of its subclasses, on any failure.
        """
