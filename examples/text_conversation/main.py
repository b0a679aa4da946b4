# -*- coding: utf-8 -*-
"""
An example that demonstrates a text conversation over the realtime endpoint.

Set ``OPENAI_API_KEY`` before running it, and type ``exit`` to quit.
"""
import asyncio

from realtime_conversation import (
    Conversation,
    ConversationState,
    ItemRole,
    Message,
    Modality,
    content_text,
    setup_logger,
)


def print_last_message(state: ConversationState) -> None:
    """Print the text of the latest assistant message."""
    for item in reversed(state.entries):
        if isinstance(item, Message) and item.role == ItemRole.ASSISTANT:
            text = "".join(content_text(part) or "" for part in item.content)
            print(f"\rFriday: {text}", end="", flush=True)
            return


async def report_errors(conversation: Conversation) -> None:
    """Print the errors reported by the server."""
    async for error in conversation.errors:
        print(f"\n[{error.type}] {error.message}")


async def main() -> None:
    """The main entry point for the realtime text conversation."""
    setup_logger(level="WARNING")

    async with await Conversation.connect() as conversation:
        await conversation.wait_until_connected(timeout=10)
        await conversation.update_session(
            lambda session: setattr(session, "modalities", [Modality.TEXT]),
        )

        conversation.subscribe(print_last_message)
        errors_task = asyncio.create_task(report_errors(conversation))

        while True:
            text = await asyncio.to_thread(input, "\nUser: ")
            if text == "exit":
                break
            await conversation.send_text(ItemRole.USER, text)

    await errors_task


if __name__ == "__main__":
    asyncio.run(main())
