"""厂商响应 JSON 的严格解析模型。

只声明取回复文本所需的字段，其余字段忽略；
缺字段、空列表、类型不符都会触发 pydantic.ValidationError，
由 transport.decode_response 统一转换为 MalformedResponse。
"""

from typing import List

from pydantic import BaseModel, Field


# ---- Gemini generateContent ----


class GeminiPart(BaseModel):
    text: str


class GeminiContent(BaseModel):
    parts: List[GeminiPart] = Field(min_length=1)


class GeminiCandidate(BaseModel):
    content: GeminiContent


class GeminiResponse(BaseModel):
    """{candidates: [{content: {parts: [{text}]}}]}"""

    candidates: List[GeminiCandidate] = Field(min_length=1)

    @property
    def text(self) -> str:
        return self.candidates[0].content.parts[0].text


# ---- OpenAI chat/completions ----


class OpenAIMessage(BaseModel):
    content: str


class OpenAIChoice(BaseModel):
    message: OpenAIMessage


class ChatCompletionResponse(BaseModel):
    """{choices: [{message: {content}}]}"""

    choices: List[OpenAIChoice] = Field(min_length=1)

    @property
    def text(self) -> str:
        return self.choices[0].message.content
