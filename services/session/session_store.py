"""Simple in-memory store for studio sessions."""

from __future__ import annotations

from typing import Dict
from uuid import uuid4

from services.session.studio_session import StudioSession


class SessionStore:
	"""Keep studio sessions alive for the lifetime of the process."""

	def __init__(self) -> None:
		self._sessions: Dict[str, StudioSession] = {}

	def create(self, client) -> StudioSession:
		"""Create a new session bound to the given design client."""
		session_id = uuid4().hex
		session = StudioSession(session_id=session_id, client=client)
		self._sessions[session_id] = session
		return session

	def get(self, session_id: str) -> StudioSession:
		"""Return a session or raise KeyError if missing."""
		session = self._sessions.get(session_id)
		if session is None:
			raise KeyError(f"Session {session_id} not found")
		return session

	def close(self, session_id: str) -> None:
		"""Discard a session and every image it holds."""
		if self._sessions.pop(session_id, None) is None:
			raise KeyError(f"Session {session_id} not found")

	def __len__(self) -> int:
		return len(self._sessions)
