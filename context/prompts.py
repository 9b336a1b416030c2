"""Builtin-Stil-Prompts für die kontextabhängige Nachbearbeitung.

Jeder Prompt enthält den Platzhalter ``${output}``, der beim Rendern
durch das Transkript ersetzt wird. Die Werte hier sind die Werkswerte,
auf die ``reset`` zurücksetzt – sie werden nie verändert.
"""

from types import MappingProxyType

from config import PROMPT_PLACEHOLDER

from .models import ContextStylePrompt

# =============================================================================
# Werks-Prompts (Reihenfolge = Anzeige-Reihenfolge)
# =============================================================================

_BUILTIN_PROMPTS = (
    ContextStylePrompt(
        id="email_pro",
        name="Professional Email",
        description="Formal style with greeting and closing",
        prompt="""You rewrite dictated messages as professional emails.

Rules:
- Keep the exact meaning of the original message
- Add an appropriate greeting
- Use a formal, professional tone
- Add a polite closing (Best regards, Kind regards)
- Fix grammar and spelling
- Split into paragraphs where needed

Dictated text:
${output}

Rewritten email:""",
        is_builtin=True,
    ),
    ContextStylePrompt(
        id="chat",
        name="Chat / Messaging",
        description="Casual and short",
        prompt="""You rewrite dictated messages as chat messages.

Rules:
- Keep the message short and direct
- Casual but correct tone
- No formal greetings or closings
- Only fix grammar and spelling
- Keep colloquial expressions where appropriate

Dictated text:
${output}

Rewritten message:""",
        is_builtin=True,
    ),
    ContextStylePrompt(
        id="code",
        name="Code / Development",
        description="Raw code or technical comments",
        prompt="""You are an assistant for developers.

If the dictated text describes code or a programming instruction:
- Generate the corresponding code directly
- No markdown, no code fences
- Raw code ready to paste

If the text is a comment or an explanation:
- Format it as an appropriate code comment
- Keep it technical and concise

Dictated text:
${output}

Result:""",
        is_builtin=True,
    ),
    ContextStylePrompt(
        id="notes",
        name="Notes / Documentation",
        description="Structured with bullet points",
        prompt="""You rewrite dictated notes.

Rules:
- Structure the content with bullet points (-)
- Use headings when there are several topics
- Keep the essential information
- Fix grammar
- Clear, scannable format

Dictated text:
${output}

Rewritten notes:""",
        is_builtin=True,
    ),
    ContextStylePrompt(
        id="ai_assistant",
        name="AI Assistant",
        description="Optimized prompt engineering",
        prompt="""You turn dictated instructions into well-formed prompts for an AI assistant.

Rules:
- Rephrase as a clear, structured prompt
- Add context where necessary
- Use precise instructions
- Format suitable for ChatGPT/Claude

Dictated text:
${output}

Optimized prompt:""",
        is_builtin=True,
    ),
    ContextStylePrompt(
        id="social_pro",
        name="Professional Social",
        description="LinkedIn - professional tone",
        prompt="""You help write posts for LinkedIn.

Rules:
- Professional but approachable tone
- No excessive jargon
- Clear structure
- Suited to the LinkedIn format
- Fix grammar

Dictated text:
${output}

Rewritten post:""",
        is_builtin=True,
    ),
    ContextStylePrompt(
        id="social_casual",
        name="Casual Social",
        description="Twitter/X - casual tone",
        prompt="""You help write posts for Twitter/X.

Rules:
- Short message (max 280 characters if possible)
- Casual tone
- Emojis are fine where appropriate
- Direct and punchy

Dictated text:
${output}

Rewritten tweet:""",
        is_builtin=True,
    ),
    ContextStylePrompt(
        id="correction",
        name="Simple Correction",
        description="Spelling and grammar only (fallback)",
        prompt="""Only fix the spelling and grammar of the following text. Do not change its style or meaning.

Text:
${output}

Corrected text:""",
        is_builtin=True,
    ),
    ContextStylePrompt(
        id="dev_tools",
        name="Dev Tools",
        description="GitHub, Linear - issues and PRs",
        prompt="""You help write technical content (issues, PRs, tickets).

Rules:
- Clear, descriptive title
- Structured description
- Bullet points for steps and details
- Technical but accessible tone
- No greetings or closings

Dictated text:
${output}

Rewritten content:""",
        is_builtin=True,
    ),
)

BUILTIN_PROMPTS = MappingProxyType({p.id: p for p in _BUILTIN_PROMPTS})


def get_builtin_prompts() -> list[ContextStylePrompt]:
    """Werks-Prompts in Anzeige-Reihenfolge."""
    return list(_BUILTIN_PROMPTS)


def get_factory_prompt(prompt_id: str) -> ContextStylePrompt | None:
    """Werkswert eines Builtin-Prompts oder None für Custom-IDs."""
    return BUILTIN_PROMPTS.get(prompt_id)


def render_prompt(template: str, transcript: str) -> str:
    """Setzt das Transkript in den Prompt ein.

    Templates ohne Platzhalter bekommen das Transkript angehängt,
    damit eigene Prompts nicht stillschweigend den Text verlieren.
    """
    if PROMPT_PLACEHOLDER in template:
        return template.replace(PROMPT_PLACEHOLDER, transcript)
    return f"{template}\n\n{transcript}"


__all__ = [
    "BUILTIN_PROMPTS",
    "get_builtin_prompts",
    "get_factory_prompt",
    "render_prompt",
]
