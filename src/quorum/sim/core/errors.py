from __future__ import annotations


class QuorumError(Exception):
    """Base class for simulation errors."""


class ConfigurationError(QuorumError, ValueError):
    """A parameter is outside its valid range; raised before the first cycle."""


class AgentFault(QuorumError):
    """A recoverable fault confined to one agent's turn within a cycle."""


class StaleAgentError(AgentFault):
    pass


class EmptyCandidatesError(AgentFault):
    pass


class WorldInvariantError(QuorumError):
    """The registry or spatial index is corrupted; the run cannot continue."""
