import asyncio
import inspect
import typing


CallbackType = typing.Callable[..., typing.Any]

# Events published by the playback clock, with the arguments passed to listeners.
PLAYBACK_EVENTS: typing.Dict[str, str] = {
	"start": "(step_count, interval_seconds)",
	"step": "(index, token)",
	"stop": "(steps_played)",
}


class EventEmitter:

	"""
	Listener registry for playback events, supporting sync and async callbacks.

	Only the names in ``events`` may be subscribed to, so a typo in an event
	name fails at registration instead of silently never firing.
	"""

	def __init__ (self, events: typing.Iterable[str] = PLAYBACK_EVENTS) -> None:

		"""
		Initialize an empty registry for the given event names.
		"""

		self._listeners: typing.Dict[str, typing.List[CallbackType]] = {name: [] for name in events}


	def on (self, event_name: str, callback: CallbackType) -> None:

		"""
		Register a callback for an event name.
		"""

		if event_name not in self._listeners:
			raise ValueError(f"Unknown event {event_name!r}. Available: {list(self._listeners)}")

		self._listeners[event_name].append(callback)

	def off (self, event_name: str, callback: CallbackType) -> None:

		"""
		Unregister a previously registered callback.

		Raises ``ValueError`` if the callback is not registered for the event.
		"""

		if callback not in self._listeners.get(event_name, []):
			raise ValueError(f"Callback not registered for event {event_name!r}")

		self._listeners[event_name].remove(callback)


	def listeners (self, event_name: str) -> typing.List[CallbackType]:

		"""Return a copy of the callbacks registered for an event."""

		return list(self._listeners.get(event_name, []))


	def emit_sync (self, event_name: str, *args: typing.Any, **kwargs: typing.Any) -> None:

		"""
		Emit an event and call non-async listeners immediately.

		Used by blocking playback, where there is no event loop to await on.
		"""

		for callback in self.listeners(event_name):

			if inspect.iscoroutinefunction(callback):
				raise ValueError(f"Async callback registered for {event_name!r} cannot run during blocking playback")

			callback(*args, **kwargs)


	async def emit_async (self, event_name: str, *args: typing.Any, **kwargs: typing.Any) -> None:

		"""
		Emit an event, calling sync listeners directly and awaiting async ones.
		"""

		tasks: typing.List[typing.Awaitable[typing.Any]] = []

		for callback in self.listeners(event_name):

			if inspect.iscoroutinefunction(callback):
				tasks.append(callback(*args, **kwargs))

			else:
				callback(*args, **kwargs)

		if tasks:
			await asyncio.gather(*tasks)
