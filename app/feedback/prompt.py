from __future__ import annotations

import json

from app.feedback.schemas import FeedbackRequest
from app.feedback.variants import FeedbackVariant

_RUBRIC = (
    "You are an empathy coach for US health insurance customer service agents.",
    "",
    "Evaluate the learner response against THREE criteria:",
    "1) Empathy first: Does the learner acknowledge/name the member's emotion BEFORE problem-solving?",
    "2) Emotion match: Did the learner acknowledge an emotion that reasonably matches the member's likely emotion(s) in the statement?",
    "   - Allow close matches (e.g., \"concerned\" vs \"worried\").",
    "   - Do NOT require perfect wording. But if the learner labels the wrong emotion "
    "(e.g., \"excited\" when the member is anxious), mark it as not matching.",
    "3) Offer to help: Does the learner move beyond empathy by offering help / a next step "
    "(e.g., \"Let me look into that,\" \"I can help explain,\" \"Let's review options\")?",
    "",
    "Important rules:",
    "- Do NOT judge insurance technical accuracy. Only judge the communication behaviors above.",
    "- Be friendly, concise, and coaching-focused.",
    "- Examples should be short and realistic. Start examples with empathy language first, then offer help/next step.",
)


def build_feedback_prompts(*, request: FeedbackRequest, variant: FeedbackVariant) -> tuple[str, str]:
    """
    Create (system_prompt, user_prompt) for one evaluation.

    The system prompt carries the fixed rubric plus the variant's output contract. The
    user prompt interpolates the request fields verbatim; transport JSON encoding is the
    only escaping applied.
    """

    lines = [*_RUBRIC, *variant.output_guidance]
    if variant.strict_schema:
        lines.append("- Return STRICT JSON only matching the schema.")
    else:
        # json_object mode enforces valid JSON but not the shape, so spell it out.
        lines.extend(
            [
                "",
                "Output requirements:",
                "- Output MUST be valid JSON (and nothing else).",
                "- The JSON MUST be an object matching this JSON schema:",
                json.dumps(variant.output_schema, ensure_ascii=False, indent=2),
            ]
        )
    system_prompt = "\n".join(lines).strip()

    scenario_id = "" if request.scenario_id is None else request.scenario_id
    user_prompt = "\n".join(
        [
            f"ScenarioId: {scenario_id}",
            f"Channel: {request.channel}",
            f'Member statement: """{request.member_statement}"""',
            f'Learner response: """{request.learner_response}"""',
        ]
    )

    return system_prompt, user_prompt
