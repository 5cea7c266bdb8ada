# school_scheduler/services/drafting.py
"""
Absence message drafting via the Gemini generateContent API.

Never raises: any failure (no key, HTTP error, timeout, empty reply)
returns FALLBACK_MESSAGE.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models"

FALLBACK_MESSAGE = (
    "体調不良のため、本日の授業を欠席させていただきます。"
    "何卒よろしくお願い申し上げます。"
)

FULL_DAY_SUBJECT = "終日（全授業）"

PROMPT_TEMPLATE = """
以下の情報をもとに、学校の先生へ送る丁寧な欠席連絡のメッセージ文を作成してください。

【欠席理由】: {reason}
【授業名】: {subject}
【日付】: {date}

敬語（です・ます調）で、簡潔かつ誠実な文章を2〜3文で作成してください。
出力はメッセージ本文のみにしてください。
"""


def build_prompt(reason: str, subject_title: Optional[str], date_label: str) -> str:
    return PROMPT_TEMPLATE.format(
        reason=reason,
        subject=subject_title or FULL_DAY_SUBJECT,
        date=date_label,
    )


def _extract_text(data: dict) -> str:
    """First candidate's text parts joined, or "" if the shape is unexpected."""
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()


class MessageDrafter:

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.0-flash",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.transport = transport

    async def draft(self, reason: str, subject_title: Optional[str], date_label: str) -> str:
        if not self.api_key:
            logger.info("Drafting skipped: no API key configured")
            return FALLBACK_MESSAGE

        body = {
            "contents": [
                {"parts": [{"text": build_prompt(reason, subject_title, date_label)}]}
            ]
        }

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    f"{GEMINI_API_URL}/{self.model}:generateContent",
                    params={"key": self.api_key},
                    json=body,
                    timeout=self.timeout,
                )
                response.raise_for_status()
                text = _extract_text(response.json())
        except Exception as e:
            logger.error(f"Drafting request failed: {e}")
            return FALLBACK_MESSAGE

        if not text:
            logger.warning("Drafting returned empty text, using fallback")
            return FALLBACK_MESSAGE
        return text
