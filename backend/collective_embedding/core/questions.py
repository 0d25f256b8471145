"""Question Catalogue — default prompts and per-session shuffling.

Invariants:
    - DEFAULT_QUESTIONS holds 20 prompts, 5 per channel
    - shuffle_questions never mutates its input; output is a uniform permutation
"""

import random
from collections.abc import Sequence
from dataclasses import dataclass

from collective_embedding.core.channels import resolve_channel
from collective_embedding.core.domain_types import Channel


@dataclass(frozen=True)
class Question:
    text: str
    channel: Channel

    @classmethod
    def of(cls, text: str, channel: str | Channel) -> "Question":
        return cls(text=text, channel=resolve_channel(channel))


DEFAULT_QUESTIONS: tuple[Question, ...] = (
    # Cognitive / Thinking
    Question("Who helps you see problems from a new perspective?", Channel.COGNITIVE),
    Question("Who asks questions that shift the direction of a discussion?", Channel.COGNITIVE),
    Question("Who would you want to learn from intellectually?", Channel.COGNITIVE),
    Question("Who tends to frame complex ideas clearly?", Channel.COGNITIVE),
    Question("Who brings depth to group conversations?", Channel.COGNITIVE),
    # Creative / Generative
    Question("Who brings the most unexpected or original ideas?", Channel.CREATIVE),
    Question("Who inspires others creatively?", Channel.CREATIVE),
    Question("Who would you brainstorm with when you feel stuck?", Channel.CREATIVE),
    Question("Who pushes conceptual boundaries?", Channel.CREATIVE),
    Question("Who introduces surprising connections between ideas?", Channel.CREATIVE),
    # Technical / Execution
    Question(
        "Who would you go to for solving a complex technical or practical problem?",
        Channel.TECHNICAL,
    ),
    Question("Who would you trust to make things work under pressure?", Channel.TECHNICAL),
    Question(
        "Who would you want as a teammate on a challenging build/prototype task?",
        Channel.TECHNICAL,
    ),
    Question("Who is strongest at translating ideas into working prototypes?", Channel.TECHNICAL),
    Question(
        "Who handles practical constraints well (time, tools, feasibility)?",
        Channel.TECHNICAL,
    ),
    # Social / Stabilization
    Question("Who is the best listener in the group?", Channel.SOCIAL),
    Question("Who brings emotional stability or calm to the team?", Channel.SOCIAL),
    Question("Who raises group morale and energy?", Channel.SOCIAL),
    Question("Who helps resolve tension or conflict when it appears?", Channel.SOCIAL),
    Question("Who makes collaboration feel easier and safer?", Channel.SOCIAL),
)


def shuffle_questions(
    questions: Sequence[Question], rng: random.Random | None = None,
) -> list[Question]:
    """Fisher-Yates shuffle into a new list."""
    rng = rng or random.Random()
    shuffled = list(questions)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
