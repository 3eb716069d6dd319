"""OpenAI Responses API client for image analysis."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from visual_dictionary.services.analysis import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def describe(
        self,
        *,
        model: str,
        image_url: str,
        instructions: str,
        prompt: str,
        max_output_tokens: int,
    ) -> str:
        """Send the image URL to the model and return its raw text answer."""
        response = await self.client.responses.create(
            model=model,
            instructions=instructions,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {
                            "type": "input_image",
                            "image_url": image_url,
                            "detail": "high",
                        },
                    ],
                }
            ],
            max_output_tokens=max_output_tokens,
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text
