"""Advisor registry: metric, tool and stage to advisor mappings."""

from __future__ import annotations

from .types import AdvisorInfo, SelectorKind

METRIC_ADVISORS: dict[str, AdvisorInfo] = {
    "security": AdvisorInfo(
        advisor="bofh",
        icon="😈",
        rationale="BOFH is paranoid about security, expects users to break everything",
        helps_with="Finding vulnerabilities, defensive thinking, access control",
    ),
    "testing": AdvisorInfo(
        advisor="stoic",
        icon="🏛️",
        rationale="Stoics teach discipline through adversity - tests reveal truth",
        helps_with="Persistence through failures, accepting harsh feedback",
    ),
    "documentation": AdvisorInfo(
        advisor="confucius",
        icon="🎓",
        rationale="Confucius emphasized teaching and transmitting wisdom",
        helps_with="Clear explanations, teaching future maintainers",
    ),
    "completion": AdvisorInfo(
        advisor="art_of_war",
        icon="⚔️",
        rationale="Sun Tzu teaches strategy and decisive execution",
        helps_with="Prioritization, knowing when to attack vs wait",
    ),
    "alignment": AdvisorInfo(
        advisor="tao",
        icon="☯️",
        rationale="Tao emphasizes balance, flow, and purpose",
        helps_with="Ensuring work serves project goals, finding harmony",
    ),
    "clarity": AdvisorInfo(
        advisor="gracian",
        icon="🎭",
        rationale="Gracián's maxims are models of clarity and pragmatism",
        helps_with="Simplifying complexity, clear communication",
    ),
    "ci_cd": AdvisorInfo(
        advisor="kybalion",
        icon="⚗️",
        rationale="Kybalion teaches cause and effect - CI/CD is pure causation",
        helps_with="Understanding pipelines, automation philosophy",
    ),
    "dogfooding": AdvisorInfo(
        advisor="murphy",
        icon="🔧",
        rationale="Murphy's Law: if it can break, it will - use your own tools!",
        helps_with="Finding edge cases, eating your own cooking",
    ),
    "uniqueness": AdvisorInfo(
        advisor="shakespeare",
        icon="🎭",
        rationale="Shakespeare created unique works that transcended his time",
        helps_with="Creative differentiation, memorable design",
    ),
    "codebase": AdvisorInfo(
        advisor="enochian",
        icon="🔮",
        rationale="Enochian mysticism reveals hidden structure and patterns",
        helps_with="Architecture, finding hidden connections",
    ),
    "parallelizable": AdvisorInfo(
        advisor="tao_of_programming",
        icon="💻",
        rationale="The Tao of Programming teaches elegant parallel design",
        helps_with="Decomposition, independent task design",
    ),
    "ethics": AdvisorInfo(
        advisor="rebbe",
        icon="🕎",
        rationale="The Rebbe teaches ethical conduct and righteous behavior (מוסר)",
        helps_with="Code ethics, proper conduct, doing the right thing",
        language="hebrew",
    ),
    "perseverance": AdvisorInfo(
        advisor="tzaddik",
        icon="✡️",
        rationale="The Tzaddik (righteous one) demonstrates steadfast commitment",
        helps_with="Persistence, staying on the righteous path, not giving up",
        language="hebrew",
    ),
    "wisdom": AdvisorInfo(
        advisor="chacham",
        icon="📜",
        rationale="The Chacham (sage) seeks deep understanding through Torah",
        helps_with="Deep analysis, seeking understanding, learning from tradition",
        language="hebrew",
    ),
}

TOOL_ADVISORS: dict[str, AdvisorInfo] = {
    "project_scorecard": AdvisorInfo(
        advisor="pistis_sophia",
        rationale="Journey through aeons mirrors project health stages",
    ),
    "project_overview": AdvisorInfo(
        advisor="kybalion",
        rationale="Hermetic principles for holistic understanding",
    ),
    "sprint_automation": AdvisorInfo(
        advisor="art_of_war",
        rationale="Sprint is a campaign requiring strategy",
    ),
    "check_documentation_health": AdvisorInfo(
        advisor="confucius",
        rationale="Teaching requires good documentation",
    ),
    "analyze_todo2_alignment": AdvisorInfo(
        advisor="tao",
        rationale="Alignment is balance and flow",
    ),
    "detect_duplicate_tasks": AdvisorInfo(
        advisor="bofh",
        rationale="Duplicates are user error manifested",
    ),
    "scan_dependency_security": AdvisorInfo(
        advisor="bofh",
        rationale="Security paranoia is a feature",
    ),
    "run_tests": AdvisorInfo(
        advisor="stoic",
        rationale="Tests teach through failure",
    ),
    "validate_ci_cd_workflow": AdvisorInfo(
        advisor="kybalion",
        rationale="CI/CD is cause and effect",
    ),
    "dev_reload": AdvisorInfo(
        advisor="murphy",
        rationale="Hot reload because Murphy says restarts will fail at the worst time",
    ),
    "ethics_check": AdvisorInfo(
        advisor="rebbe",
        rationale="Rebbe guides ethical code review and conduct",
        language="hebrew",
    ),
    "wisdom_reflection": AdvisorInfo(
        advisor="chacham",
        rationale="Chacham provides deep wisdom for retrospectives",
        language="hebrew",
    ),
}

STAGE_ADVISORS: dict[str, AdvisorInfo] = {
    "daily_checkin": AdvisorInfo(
        advisor="pistis_sophia",
        icon="📜",
        rationale="Start each day with enlightenment journey wisdom",
    ),
    "planning": AdvisorInfo(
        advisor="art_of_war",
        icon="⚔️",
        rationale="Planning is strategy - Sun Tzu is the master",
    ),
    "implementation": AdvisorInfo(
        advisor="tao_of_programming",
        icon="💻",
        rationale="During coding, let the code flow naturally",
    ),
    "debugging": AdvisorInfo(
        advisor="bofh",
        icon="😈",
        rationale="BOFH knows all the ways things break",
    ),
    "review": AdvisorInfo(
        advisor="stoic",
        icon="🏛️",
        rationale="Review requires accepting harsh truths with equanimity",
    ),
    "retrospective": AdvisorInfo(
        advisor="confucius",
        icon="🎓",
        rationale="Retrospectives are about learning and teaching",
    ),
    "celebration": AdvisorInfo(
        advisor="shakespeare",
        icon="🎭",
        rationale="Celebrate with drama and poetry!",
    ),
    "shabbat": AdvisorInfo(
        advisor="rebbe",
        icon="🕎",
        rationale="Shabbat is for reflection and spiritual renewal (מנוחה)",
        language="hebrew",
    ),
    "teshuvah": AdvisorInfo(
        advisor="tzaddik",
        icon="✡️",
        rationale="Teshuvah (repentance) is for fixing past mistakes and returning to the right path",
        language="hebrew",
    ),
    "learning": AdvisorInfo(
        advisor="chacham",
        icon="📜",
        rationale="Torah study and continuous learning (לימוד)",
        language="hebrew",
    ),
}


class AdvisorRegistry:
    """Read-only lookup over the advisor tables."""

    def __init__(
        self,
        *,
        metric: dict[str, AdvisorInfo] | None = None,
        tool: dict[str, AdvisorInfo] | None = None,
        stage: dict[str, AdvisorInfo] | None = None,
    ) -> None:
        self._tables: dict[SelectorKind, dict[str, AdvisorInfo]] = {
            SelectorKind.METRIC: dict(METRIC_ADVISORS if metric is None else metric),
            SelectorKind.TOOL: dict(TOOL_ADVISORS if tool is None else tool),
            SelectorKind.STAGE: dict(STAGE_ADVISORS if stage is None else stage),
        }

    def lookup(self, kind: SelectorKind | str, key: str) -> AdvisorInfo | None:
        return self._tables[SelectorKind(kind)].get(key)

    def all(self, kind: SelectorKind | str) -> dict[str, AdvisorInfo]:
        return dict(self._tables[SelectorKind(kind)])
