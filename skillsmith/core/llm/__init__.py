from skillsmith.core.llm.advisor import Advisor, AdvisorChain
from skillsmith.core.llm.protocol import (
    FilePart,
    ImagePart,
    LLMRequest,
    Message,
    MessagePart,
    TextPart,
)

__all__ = [
    "Advisor",
    "AdvisorChain",
    "FilePart",
    "ImagePart",
    "LLMRequest",
    "Message",
    "MessagePart",
    "TextPart",
]
