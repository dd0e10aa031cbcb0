"""Insert subsystem: input detection, mode selection, overwrite guard, and the insert flow."""

from mb_pass.insert.errors import InsertAborted as InsertAborted
from mb_pass.insert.errors import InsertError as InsertError
from mb_pass.insert.modes import InputMode as InputMode
from mb_pass.insert.orchestrator import Inserter as Inserter
from mb_pass.insert.source import StdinSource as StdinSource
