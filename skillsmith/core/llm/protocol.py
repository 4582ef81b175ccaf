from typing import Annotated, Any, Dict, List, Literal, Optional, TypeAlias, Union

from pydantic import BaseModel, Field, model_validator

__all__ = [
    "MessageRole",
    "TextPart",
    "ImagePart",
    "FilePart",
    "MessagePart",
    "Message",
    "DeltaMessage",
    "Usage",
    "ChatCompletion",
    "ChatCompletionChunk",
    "LLMRequest",
]

MessageRole: TypeAlias = Literal["system", "user", "assistant", "tool"]


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str = ""


class ImagePart(BaseModel):
    type: Literal["image"] = "image"
    url: str


class FilePart(BaseModel):
    type: Literal["file"] = "file"
    url: str
    file_name: str = ""
    mime: str = "application/octet-stream"


MessagePart: TypeAlias = Annotated[
    Union[TextPart, ImagePart, FilePart], Field(discriminator="type")
]


class Message(BaseModel):
    """对话消息

    消息内容由有序的 parts 组成，只有 TextPart 会参与文本拼接，
    其他类型的 part 原样保留
    """

    role: MessageRole
    parts: List[MessagePart] = Field(default_factory=list)
    reasoning_content: Optional[str] = None
    tool_call_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _content_shorthand(cls, data: Any) -> Any:
        # 兼容 Message(role=..., content="...") 的写法
        if isinstance(data, dict) and "content" in data:
            data = dict(data)
            content = data.pop("content")
            if content is not None and not data.get("parts"):
                data["parts"] = [TextPart(text=content)]
        return data

    @property
    def text(self) -> str:
        """拼接所有文本 part 的内容"""
        return "".join(part.text for part in self.parts if isinstance(part, TextPart))

    @property
    def content(self) -> str:
        return self.text

    @classmethod
    def system(cls, text: str) -> "Message":
        return cls(role="system", parts=[TextPart(text=text)])

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role="user", parts=[TextPart(text=text)])

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(role="assistant", parts=[TextPart(text=text)])


class DeltaMessage(BaseModel):
    role: Optional[MessageRole] = None
    reasoning_content: Optional[str] = None
    content: Optional[str] = None


class Usage(BaseModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class ChatCompletion(BaseModel):
    id: str
    object: Literal["chat.completion"]
    created: int
    model: str
    message: Message
    finish_reason: Optional[str] = None
    usage: Optional[Usage] = None


class ChatCompletionChunk(BaseModel):
    id: str
    object: Literal["chat.completion.chunk"]
    created: int
    model: str
    delta: DeltaMessage
    finish_reason: Optional[str] = None
    usage: Optional[Usage] = None


class LLMRequest(BaseModel):
    model: str
    messages: List[Message]
    generate_config: Optional[Dict[str, Any]] = None
