"""Registry of the prompts the application knows about.

Adding a prompt means dropping a ``<name>.tmpl`` file next to the others and
registering its name here so the startup self-check covers it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType


class PromptName(StrEnum):
    SUMMARIZE_THREAD = "summarize_thread"
    DIRECT_MESSAGE_QUESTION = "direct_message_question"
    EMOJI_SELECT = "emoji_select"
    MEETING_SUMMARY = "meeting_summary"
    MEETING_SUMMARY_ONLY = "summary_only"
    MEETING_KEY_POINTS = "meeting_key_points"
    SPELLCHECK = "spellcheck"
    CHANGE_TONE = "change_tone"


@dataclass(frozen=True)
class PromptInfo:
    name: PromptName
    description: str
    parameters: tuple[str, ...] = ()  # prompt_parameters keys the template reads


PROMPTS = MappingProxyType(
    {
        info.name: info
        for info in (
            PromptInfo(PromptName.SUMMARIZE_THREAD, "Summarize a thread", ("thread",)),
            PromptInfo(PromptName.DIRECT_MESSAGE_QUESTION, "Answer a question asked in a direct message"),
            PromptInfo(PromptName.EMOJI_SELECT, "Pick an emoji reaction for a message"),
            PromptInfo(PromptName.MEETING_SUMMARY, "Summarize a meeting transcript", ("transcript",)),
            PromptInfo(PromptName.MEETING_SUMMARY_ONLY, "Summary-only meeting output", ("transcript",)),
            PromptInfo(PromptName.MEETING_KEY_POINTS, "Extract meeting key points", ("transcript",)),
            PromptInfo(PromptName.SPELLCHECK, "Fix spelling and grammar"),
            PromptInfo(PromptName.CHANGE_TONE, "Rewrite a message in another tone", ("tone",)),
        )
    }
)


def get_prompt_info(name: str) -> PromptInfo | None:
    """Return registry metadata for ``name``, or None if it isn't registered."""
    try:
        return PROMPTS[PromptName(name)]
    except ValueError:
        return None
