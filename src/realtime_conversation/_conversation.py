# -*- coding: utf-8 -*-
"""The conversation that folds the server events of one transport session
into observable state."""

import asyncio
import copy
import dataclasses
import inspect
import threading
from dataclasses import dataclass
from typing import Any, AsyncIterable, Awaitable, Callable

from ._config import RealtimeConfig
from ._events import (
    ClientEvent,
    ConversationCreatedEvent,
    ConversationItemCreatedEvent,
    ConversationItemCreateEvent,
    ConversationItemDeletedEvent,
    ConversationItemDeleteEvent,
    ConversationItemInputAudioTranscriptionCompletedEvent,
    ConversationItemInputAudioTranscriptionFailedEvent,
    ConversationItemTruncateEvent,
    ErrorEvent,
    InputAudioBufferAppendEvent,
    InputAudioBufferClearEvent,
    InputAudioBufferCommitEvent,
    ResponseAudioDeltaEvent,
    ResponseAudioTranscriptDeltaEvent,
    ResponseAudioTranscriptDoneEvent,
    ResponseCancelEvent,
    ResponseContentPartAddedEvent,
    ResponseContentPartDoneEvent,
    ResponseCreateEvent,
    ResponseFunctionCallArgumentsDeltaEvent,
    ResponseFunctionCallArgumentsDoneEvent,
    ResponseTextDeltaEvent,
    ResponseTextDoneEvent,
    ServerEvent,
    SessionCreatedEvent,
    SessionUpdatedEvent,
    SessionUpdateEvent,
)
from ._exception import (
    ConversationStateError,
    ProtocolDecodeError,
    TransportError,
)
from ._logging import logger
from ._models import (
    AudioContent,
    Content,
    FunctionCall,
    FunctionCallOutput,
    InputAudioContent,
    InputTextContent,
    Item,
    ItemRole,
    Message,
    ResponseConfig,
    ServerError,
    Session,
    TextContent,
)
from ._transport import RealtimeTransport
from ._utils import Channel, _generate_id


@dataclass(frozen=True)
class ConversationState:
    """A consistent, detached copy of the conversation state."""

    id: str | None
    """The server-assigned conversation id."""

    session: Session | None
    """The current session, set once the session is created."""

    entries: tuple[Item, ...]
    """The conversation items, in insertion order."""

    connected: bool
    """Whether the session is established and the connection is open."""


class Conversation:
    """A multi-turn realtime conversation over one transport session.

    A background task consumes the event sequence of the transport and
    applies each event, in arrival order, to the conversation state. The
    state is only mutated by that task (or by calling `apply` directly) and
    is read through `snapshot`, the copying properties, or the callbacks
    registered with `subscribe`. Errors reported by the server are delivered
    through `errors` and never stop the conversation.

    Example:
        .. code-block:: python

            async with await Conversation.connect() as conversation:
                await conversation.wait_until_connected()
                await conversation.send_text("user", "Hello!")
    """

    def __init__(self, transport: RealtimeTransport) -> None:
        """Initialize the conversation.

        Args:
            transport (`RealtimeTransport`):
                The connected transport session whose events are consumed.
                The conversation takes ownership of it and closes it on
                `close`.
        """
        self._transport = transport

        self._lock = threading.Lock()
        self._id: str | None = None
        self._session: Session | None = None
        self._entries: list[Item] = []
        self._connected = False
        self._finished = False

        self._observers: list[Callable[[ConversationState], Any]] = []
        self._errors: Channel[ServerError] = Channel("error channel")

        self._connected_event = asyncio.Event()
        self._finished_event = asyncio.Event()
        self._consume_task: asyncio.Task | None = None
        self._closed = False

    @classmethod
    async def connect(
        cls,
        config: RealtimeConfig | None = None,
        *,
        api_key: str | None = None,
        model: str | None = None,
    ) -> "Conversation":
        """Connect to the realtime endpoint and start a conversation.

        Args:
            config (`RealtimeConfig | None`, optional):
                The connection configuration. When omitted, it is built from
                `api_key`, or read from the environment.
            api_key (`str | None`, optional):
                The bearer credential, used when no config is given.
            model (`str | None`, optional):
                Override the model of the configuration.

        Returns:
            `Conversation`:
                The started conversation. It becomes connected when the
                server announces the session.
        """
        if config is None:
            if api_key is not None:
                config = RealtimeConfig(api_key=api_key)
            else:
                config = RealtimeConfig.from_env()
        if model is not None:
            config = dataclasses.replace(config, model=model)

        transport = RealtimeTransport.from_config(config)
        await transport.connect()

        conversation = cls(transport)
        conversation.start()
        return conversation

    def start(self) -> None:
        """Start consuming the events of the transport session. Starting an
        already started conversation is a no-op."""
        if self._closed:
            raise ConversationStateError("The conversation is closed")
        if self._consume_task is not None:
            return
        self._consume_task = asyncio.create_task(self._consume())

    async def _consume(self) -> None:
        try:
            async for event in self._transport.events:
                self.apply(event)
        except (TransportError, ProtocolDecodeError) as e:
            logger.warning("The conversation ends with an error: %s", e)
        finally:
            self._finish()

    def _finish(self) -> None:
        """Enter the terminal disconnected state."""
        with self._lock:
            if self._finished:
                return
            self._finished = True
            changed = self._connected
            self._connected = False
            state = self._snapshot_locked()

        self._errors.close()
        self._finished_event.set()
        if changed:
            self._notify(state)
        logger.info("Conversation finished")

    # =========================================================================
    # Event Application
    # =========================================================================

    def apply(self, event: ServerEvent) -> None:
        """Apply one server event to the conversation state.

        Events addressing an absent item, an out-of-bounds content index or
        a content part of another variant are dropped. Events that have no
        effect on the state are ignored. After the conversation finished,
        all events are ignored.

        Args:
            event (`ServerEvent`):
                The decoded server event.
        """
        with self._lock:
            if self._finished:
                logger.debug("Ignoring %s after finish", event.type)
                return
            changed = self._reduce(event)
            state = self._snapshot_locked() if changed else None

        if state is not None:
            self._notify(state)

    def _reduce(  # pylint: disable=too-many-return-statements
        self,
        event: ServerEvent,
    ) -> bool:
        """Mutate the state for one event, and tell whether it changed."""
        match event:
            case ErrorEvent(error=error):
                self._errors.put(error)
                return False

            case SessionCreatedEvent(session=session):
                self._session = session
                self._connected = True
                self._connected_event.set()
                return True

            case SessionUpdatedEvent(session=session):
                self._session = session
                return True

            case ConversationCreatedEvent(conversation=conversation):
                self._id = conversation.id
                return True

            case ConversationItemCreatedEvent(item=item):
                # Always appended, the previous_item_id hint is not used
                self._entries.append(item)
                return True

            case ConversationItemDeletedEvent(item_id=item_id):
                index = self._find(item_id)
                if index is None:
                    return self._drop(event)
                del self._entries[index]
                return True

            case ConversationItemInputAudioTranscriptionCompletedEvent(
                transcript=transcript,
            ):
                return self._update_part(
                    event,
                    InputAudioContent,
                    lambda part: dataclasses.replace(
                        part,
                        transcript=transcript,
                    ),
                )

            case ConversationItemInputAudioTranscriptionFailedEvent(
                error=error,
            ):
                self._errors.put(error)
                return False

            case ResponseContentPartAddedEvent():
                return self._insert_part(event)

            case ResponseContentPartDoneEvent(part=part):
                return self._update_part(event, None, lambda _: part)

            case ResponseTextDeltaEvent(delta=delta):
                return self._update_part(
                    event,
                    TextContent,
                    lambda part: TextContent(text=part.text + delta),
                )

            case ResponseTextDoneEvent(text=text):
                return self._update_part(
                    event,
                    None,
                    lambda _: TextContent(text=text),
                )

            case ResponseAudioTranscriptDeltaEvent(delta=delta):
                return self._update_part(
                    event,
                    AudioContent,
                    lambda part: dataclasses.replace(
                        part,
                        transcript=(part.transcript or "") + delta,
                    ),
                )

            case ResponseAudioTranscriptDoneEvent(transcript=transcript):
                return self._update_part(
                    event,
                    AudioContent,
                    lambda part: dataclasses.replace(
                        part,
                        transcript=transcript,
                    ),
                )

            case ResponseAudioDeltaEvent(delta=delta):
                return self._update_part(
                    event,
                    AudioContent,
                    lambda part: dataclasses.replace(
                        part,
                        audio=part.audio + delta,
                    ),
                )

            case ResponseFunctionCallArgumentsDeltaEvent(delta=delta):
                return self._update_function_call(
                    event,
                    lambda arguments: arguments + delta,
                )

            case ResponseFunctionCallArgumentsDoneEvent(arguments=arguments):
                return self._update_function_call(
                    event,
                    lambda _: arguments,
                )

            case _:
                logger.debug("No state change for %s", event.type)
                return False

    def _find(self, item_id: str) -> int | None:
        for index, item in enumerate(self._entries):
            if item.id == item_id:
                return index
        return None

    @staticmethod
    def _drop(event: ServerEvent) -> bool:
        logger.debug(
            "Dropping %s: no matching item or content part",
            event.type,
        )
        return False

    def _find_message(self, event: ServerEvent) -> tuple[int, Message] | None:
        index = self._find(event.item_id)
        if index is None:
            return None
        item = self._entries[index]
        if not isinstance(item, Message):
            return None
        return index, item

    def _insert_part(self, event: ResponseContentPartAddedEvent) -> bool:
        found = self._find_message(event)
        if found is None:
            return self._drop(event)
        index, message = found

        if not 0 <= event.content_index <= len(message.content):
            return self._drop(event)

        content = list(message.content)
        content.insert(event.content_index, event.part)
        self._entries[index] = dataclasses.replace(message, content=content)
        return True

    def _update_part(
        self,
        event: ServerEvent,
        variant: type | None,
        update: Callable[[Content], Content],
    ) -> bool:
        """Replace the content part addressed by the event.

        When a variant is given, the event is dropped if the addressed part
        is of another variant.
        """
        found = self._find_message(event)
        if found is None:
            return self._drop(event)
        index, message = found

        content_index = event.content_index
        if not 0 <= content_index < len(message.content):
            return self._drop(event)

        part = message.content[content_index]
        if variant is not None and not isinstance(part, variant):
            return self._drop(event)
        part = update(part)

        content = list(message.content)
        content[content_index] = part
        self._entries[index] = dataclasses.replace(message, content=content)
        return True

    def _update_function_call(
        self,
        event: ResponseFunctionCallArgumentsDeltaEvent
        | ResponseFunctionCallArgumentsDoneEvent,
        update: Callable[[str], str],
    ) -> bool:
        index = self._find(event.item_id)
        if index is None or not isinstance(self._entries[index], FunctionCall):
            return self._drop(event)

        function_call = self._entries[index]
        self._entries[index] = dataclasses.replace(
            function_call,
            arguments=update(function_call.arguments),
        )
        return True

    # =========================================================================
    # Read Path
    # =========================================================================

    def _snapshot_locked(self) -> ConversationState:
        return ConversationState(
            id=self._id,
            session=copy.deepcopy(self._session),
            entries=tuple(copy.deepcopy(self._entries)),
            connected=self._connected,
        )

    def snapshot(self) -> ConversationState:
        """Get a consistent copy of the conversation state.

        Returns:
            `ConversationState`:
                The state at the time of the call, detached from later
                mutations.
        """
        with self._lock:
            return self._snapshot_locked()

    @property
    def id(self) -> str | None:
        """The server-assigned conversation id."""
        with self._lock:
            return self._id

    @property
    def session(self) -> Session | None:
        """A copy of the current session."""
        with self._lock:
            return copy.deepcopy(self._session)

    @property
    def entries(self) -> list[Item]:
        """A copy of the conversation items, in insertion order."""
        with self._lock:
            return copy.deepcopy(self._entries)

    @property
    def connected(self) -> bool:
        """Whether the session is established and the connection is open."""
        with self._lock:
            return self._connected

    @property
    def errors(self) -> AsyncIterable[ServerError]:
        """The errors reported by the server, in arrival order.

        The sequence can be consumed only once, and ends when the
        conversation finishes.
        """
        return self._errors

    def subscribe(
        self,
        callback: Callable[[ConversationState], Any],
    ) -> Callable[[], None]:
        """Register a callback invoked with a new snapshot after every state
        change.

        Args:
            callback (`Callable[[ConversationState], Any]`):
                The callback. Exceptions raised by it are logged.

        Returns:
            `Callable[[], None]`:
                A function that unregisters the callback.
        """
        with self._lock:
            self._observers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._observers:
                    self._observers.remove(callback)

        return unsubscribe

    def _notify(self, state: ConversationState) -> None:
        with self._lock:
            observers = list(self._observers)

        for callback in observers:
            try:
                callback(state)
            except Exception as e:
                logger.error(
                    "Error in conversation observer: %s",
                    e,
                    exc_info=True,
                )

    async def wait_until_connected(self, timeout: float | None = None) -> None:
        """Wait until the server announces the session.

        Args:
            timeout (`float | None`, optional):
                The maximum number of seconds to wait.

        Raises:
            `asyncio.TimeoutError`:
                If the timeout expires first.
            `ConversationStateError`:
                If the conversation finishes before it gets connected.
        """
        if self.connected:
            return

        waiters = [
            asyncio.ensure_future(self._connected_event.wait()),
            asyncio.ensure_future(self._finished_event.wait()),
        ]
        try:
            done, _ = await asyncio.wait(
                waiters,
                timeout=timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            for waiter in waiters:
                waiter.cancel()

        if not done:
            raise asyncio.TimeoutError(
                "Timed out waiting for the conversation to connect",
            )

        if not self.connected:
            raise ConversationStateError(
                "The conversation finished before it was connected",
            )

    async def when_connected(
        self,
        callback: Callable[[], Awaitable[Any] | Any],
    ) -> Any:
        """Run the callback once the conversation is connected.

        Args:
            callback (`Callable[[], Awaitable[Any] | Any]`):
                A sync or async callback.

        Returns:
            `Any`:
                The result of the callback.
        """
        await self.wait_until_connected()
        result = callback()
        if inspect.isawaitable(result):
            result = await result
        return result

    # =========================================================================
    # Outbound Operations
    # =========================================================================

    async def send(self, event: ClientEvent) -> None:
        """Send a client event through the transport session.

        Args:
            event (`ClientEvent`):
                The event to send.
        """
        await self._transport.send(event)

    async def update_session(self, mutator: Callable[[Session], Any]) -> None:
        """Modify a copy of the current session and send it.

        Args:
            mutator (`Callable[[Session], Any]`):
                A function that modifies the given session in place.

        Raises:
            `ConversationStateError`:
                If no session has been established yet.
        """
        session = self.session
        if session is None:
            raise ConversationStateError("Session not found")

        mutator(session)
        await self.send_session(session)

    async def send_session(self, session: Session) -> None:
        """Send a session update. The server-assigned id is never sent.

        Args:
            session (`Session`):
                The new session configuration.
        """
        session = dataclasses.replace(session, id=None)
        await self.send(SessionUpdateEvent(session=session))

    async def send_text(
        self,
        role: ItemRole | str,
        text: str,
        response: ResponseConfig | None = None,
        *,
        create_response: bool = True,
    ) -> str:
        """Add a text message to the conversation, then ask for a response.

        Args:
            role (`ItemRole | str`):
                The role of the message.
            text (`str`):
                The text of the message.
            response (`ResponseConfig | None`, optional):
                The overrides of the requested response.
            create_response (`bool`, defaults to `True`):
                Whether to request a response after the message.

        Returns:
            `str`:
                The id of the created message item.
        """
        role = ItemRole(role)
        if role == ItemRole.ASSISTANT:
            part = TextContent(text=text)
        else:
            part = InputTextContent(text=text)

        message = Message(id=_generate_id(), role=role, content=[part])
        await self.send(ConversationItemCreateEvent(item=message))

        if create_response:
            await self.create_response(response)

        return message.id

    async def send_audio_delta(
        self,
        audio: bytes,
        commit: bool = False,
    ) -> None:
        """Append audio to the input audio buffer.

        Args:
            audio (`bytes`):
                The raw audio bytes, in the session's input audio format.
            commit (`bool`, defaults to `False`):
                Whether to commit the buffer right after appending.
        """
        await self.send(InputAudioBufferAppendEvent(audio=audio))
        if commit:
            await self.commit_audio_buffer()

    async def send_function_result(self, output: FunctionCallOutput) -> None:
        """Send the result of a function call.

        Args:
            output (`FunctionCallOutput`):
                The output item, correlated by its call id.
        """
        await self.send(ConversationItemCreateEvent(item=output))

    async def create_response(
        self,
        config: ResponseConfig | None = None,
    ) -> None:
        """Ask the server to generate a response."""
        await self.send(ResponseCreateEvent(response=config))

    async def cancel_response(self) -> None:
        """Cancel the in-progress response."""
        await self.send(ResponseCancelEvent())

    async def commit_audio_buffer(self) -> None:
        """Commit the input audio buffer into a user message."""
        await self.send(InputAudioBufferCommitEvent())

    async def clear_audio_buffer(self) -> None:
        """Discard the input audio buffer."""
        await self.send(InputAudioBufferClearEvent())

    async def delete_item(self, item_id: str) -> None:
        """Ask the server to remove an item. The entry is removed when the
        server confirms the deletion."""
        await self.send(ConversationItemDeleteEvent(item_id=item_id))

    async def truncate_item(
        self,
        item_id: str,
        content_index: int,
        audio_end_ms: int,
    ) -> None:
        """Truncate the audio of an assistant message.

        Args:
            item_id (`str`):
                The id of the assistant message.
            content_index (`int`):
                The index of the audio content part.
            audio_end_ms (`int`):
                The played duration to keep, in milliseconds.
        """
        await self.send(
            ConversationItemTruncateEvent(
                item_id=item_id,
                content_index=content_index,
                audio_end_ms=audio_end_ms,
            ),
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self) -> None:
        """Stop consuming events and close the transport session. Closing
        twice is a no-op."""
        if self._closed:
            return
        self._closed = True

        task = self._consume_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        await self._transport.close()
        self._finish()

    async def __aenter__(self) -> "Conversation":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
