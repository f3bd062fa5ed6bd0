"""Prompt construction shared by every provider."""

SYSTEM_INSTRUCTION = (
    "You are a code completion assistant. Provide helpful code completions "
    "based on the context. Return only the completion text without explanations."
)


def build_prompt(prompt: str, context: str | None = None, language: str | None = None) -> str:
    """Compose the user prompt sent to the model.

    Sections appear in a fixed order and are separated by a blank line:
    ``Language: <language>``, ``Context:\\n<context>``, then
    ``Complete the following code:\\n<prompt>``. Empty optional sections
    are omitted entirely.
    """
    sections = []

    if language:
        sections.append(f"Language: {language}")

    if context:
        sections.append(f"Context:\n{context}")

    sections.append(f"Complete the following code:\n{prompt}")

    return "\n\n".join(sections)
