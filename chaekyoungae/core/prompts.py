"""Prompt template sent to the generation model."""
from __future__ import annotations

PROMPT_TEMPLATE = """"{query}"에 대해 다음 정보를 JSON 형식으로 제공해주세요:

{{
  "title": "작품명 (한글)",
  "tmdbQuery": "영문 작품명 (TMDB 검색용)",
  "tag": "책 → 영화" 또는 "영화 → 책" 또는 "애니 → 책" 등,
  "original": "원작 정보 (예: J.R.R. 톨킨의 소설)",
  "recommendation": "추천 순서 (예: 책부터 읽는 것을 강력 추천합니다)",
  "reason": "추천 이유 (2-3문장, 구체적으로)",
  "order": ["감상 순서 배열 - 각 항목은 명확하게"],
  "tips": ["팁 배열 - 2-3개의 유용한 팁"]
}}

JSON만 응답하고 다른 텍스트는 포함하지 마세요. 마크다운 코드 블록도 사용하지 마세요."""


def build_prompt(query: str) -> str:
    return PROMPT_TEMPLATE.format(query=query)
