from abc import ABC
from typing import Callable, Iterator, List, Optional

from skillsmith.core.llm.protocol import ChatCompletion, ChatCompletionChunk, LLMRequest
from skillsmith.core.utils.logger import logger


class Advisor(ABC):
    """Advisor 抽象基类

    在请求发往模型之前改写请求，或在响应返回之后改写响应。
    默认实现全部透传
    """

    def before_call(self, request: LLMRequest) -> LLMRequest:
        """请求发送前调用

        Args:
            request: LLM 请求

        Returns:
            LLMRequest: 改写后的请求
        """
        return request

    def after_call(self, request: LLMRequest, response: ChatCompletion) -> ChatCompletion:
        return response

    def on_call_error(self, request: LLMRequest, error: Exception) -> ChatCompletion:
        """请求出错时调用

        Raises:
            Exception: 默认直接抛出原异常，交给下一个 Advisor 处理
        """
        raise error

    def before_stream(self, request: LLMRequest) -> LLMRequest:
        """流式请求发送前调用

        Args:
            request: LLM 请求

        Returns:
            LLMRequest: 改写后的请求
        """
        return request

    def after_stream(self, request: LLMRequest, response: ChatCompletionChunk) -> ChatCompletionChunk:
        return response

    def on_stream_error(self, request: LLMRequest, error: Exception) -> ChatCompletionChunk:
        raise error


class AdvisorChain:
    """按洋葱模型串联多个 Advisor

    before 钩子按注册顺序执行，after 钩子逆序执行
    """

    def __init__(self, advisors: Optional[List[Advisor]] = None):
        self.advisors = advisors or []

    def add(self, advisor: Advisor) -> None:
        self.advisors.append(advisor)

    def prepare(self, request: LLMRequest, stream: bool = False) -> LLMRequest:
        """只执行 before 钩子，返回最终发往模型的请求

        Args:
            request: 原始请求
            stream: 是否走流式钩子

        Returns:
            LLMRequest: 处理后的请求
        """
        processed_request = request
        for advisor in self.advisors:
            if stream:
                processed_request = advisor.before_stream(processed_request)
            else:
                processed_request = advisor.before_call(processed_request)
        return processed_request

    def call(
        self,
        request: LLMRequest,
        api_call: Callable[[LLMRequest], ChatCompletion],
    ) -> ChatCompletion:
        """执行一次非流式调用

        Args:
            request: LLM 请求
            api_call: 实际的模型调用函数

        Returns:
            ChatCompletion: 经过 after_call 处理的响应

        Raises:
            Exception: 所有 on_call_error 都未能处理时抛出原异常
        """
        processed_request = self.prepare(request)

        try:
            response = api_call(processed_request)
        except Exception as error:
            logger.warning(f"模型调用失败: {error}")
            for advisor in reversed(self.advisors):
                try:
                    return advisor.on_call_error(processed_request, error)
                except Exception:
                    continue
            raise

        for advisor in reversed(self.advisors):
            response = advisor.after_call(processed_request, response)

        return response

    def stream(
        self,
        request: LLMRequest,
        api_stream: Callable[[LLMRequest], Iterator[ChatCompletionChunk]],
    ) -> Iterator[ChatCompletionChunk]:
        """执行一次流式调用，每个 chunk 逆序经过 after_stream

        Yields:
            ChatCompletionChunk: 处理后的响应块
        """
        processed_request = self.prepare(request, stream=True)

        try:
            for chunk in api_stream(processed_request):
                processed_chunk = chunk
                for advisor in reversed(self.advisors):
                    processed_chunk = advisor.after_stream(processed_request, processed_chunk)
                yield processed_chunk
        except Exception as error:
            logger.warning(f"模型流式调用失败: {error}")
            for advisor in reversed(self.advisors):
                try:
                    yield advisor.on_stream_error(processed_request, error)
                    return
                except Exception:
                    continue
            raise
