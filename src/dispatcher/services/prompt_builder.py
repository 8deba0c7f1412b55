"""Prompt builder for the secondary provider's single-string input."""

from dispatcher.schemas.requests import Message


class PromptBuilder:
    """Flattens a conversation into one text blob.

    User messages pass through verbatim, system messages are wrapped in
    instruction tags, and any other role is dropped.
    """

    INSTRUCTION_TEMPLATE = "[INST] {content} [/INST]"
    SEPARATOR = "\n"

    def __init__(self, instruction_template: str | None = None, separator: str | None = None):
        self.instruction_template = instruction_template or self.INSTRUCTION_TEMPLATE
        self.separator = self.SEPARATOR if separator is None else separator

    def build(self, messages: list[Message]) -> str:
        """
        Render messages, in order, as the provider's input text.

        Args:
            messages: Conversation messages

        Returns:
            The flattened prompt
        """
        lines: list[str] = []

        for message in messages:
            if message.role == "user":
                lines.append(message.content)
            elif message.role == "system":
                lines.append(self.instruction_template.format(content=message.content))

        return self.separator.join(lines)
