"""Test fixtures for Scale Advisor.

ScriptedClient stands in for LLMClient. It identifies each call by its
system directive (reverse lookup in SYSTEM_PROMPTS) and answers with a
marker naming that call, so a test can trace text through every phase.
"""

import asyncio
from collections.abc import Mapping

from scale_advisor.llm.prompts import SYSTEM_PROMPTS
from scale_advisor.models.messages import CompletionParams

# Marker key for calls without a known system directive
DEFAULT_KEY = "default"

_KEYS_BY_SYSTEM = {system: name for name, system in SYSTEM_PROMPTS.items()}


def marker(key: str) -> str:
    """Text returned by ScriptedClient for a call key."""
    return f"<<{key}>>"


class ScriptedClient:
    """Completion client stub with per-call delays, failures and responses.

    Attributes:
        calls: Every CompletionParams received, in call order
        completed: Keys of calls that returned normally, in completion order
        cancelled: Keys of calls cancelled while in flight
    """

    def __init__(
        self,
        responses: Mapping[str, str] | None = None,
        delays: Mapping[str, float] | None = None,
        failures: Mapping[str, BaseException] | None = None,
    ) -> None:
        self.responses = dict(responses or {})
        self.delays = dict(delays or {})
        self.failures = dict(failures or {})
        self.calls: list[CompletionParams] = []
        self.completed: list[str] = []
        self.cancelled: list[str] = []

    @staticmethod
    def key_for(params: CompletionParams) -> str:
        return _KEYS_BY_SYSTEM.get(params.system or "", DEFAULT_KEY)

    def keys(self) -> list[str]:
        """Keys of all received calls, in call order."""
        return [self.key_for(params) for params in self.calls]

    async def complete(self, params: CompletionParams) -> str:
        key = self.key_for(params)
        self.calls.append(params)

        try:
            await asyncio.sleep(self.delays.get(key, 0))
        except asyncio.CancelledError:
            self.cancelled.append(key)
            raise

        if key in self.failures:
            raise self.failures[key]

        self.completed.append(key)
        return self.responses.get(key, marker(key))
