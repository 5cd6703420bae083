"""Runtime environment for conslisp.

The Environment stores bindings of Symbols to evaluated Lisp values and
supports nested scopes via a `parent` link. Frames are shared, never copied:
every closure created in a frame holds a reference to that same frame, so a
later `define` or `set` there is visible to all of them.

Each frame guards its own dictionary with a lock that is held only for one
read or write of that dictionary. Chain walks release a frame's lock before
moving to the parent, and no lock is held while anything is evaluated.
"""

from __future__ import annotations

import logging
import threading
from io import StringIO
from typing import Iterator, Optional

from conslisp import LispValue
from conslisp.errors import LispTypeError, LispUnboundSymbolError
from conslisp.types.symbol import Symbol

logger = logging.getLogger(__name__)


class Environment:
    """Hierarchical mapping from Symbols to Lisp values."""

    __slots__ = ("vars", "parent", "_lock")

    def __init__(self, parent: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.parent: Environment | None = parent
        self._lock = threading.Lock()

    def _frames(self) -> Iterator[Environment]:
        env: Optional[Environment] = self
        while env is not None:
            yield env
            env = env.parent

    def child(self) -> Environment:
        """Create a new, empty frame whose parent is this one."""
        return Environment(parent=self)

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame, shadowing any ancestor.

        Raises LispTypeError if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise LispTypeError(f"Cannot define {name} as a symbol")
        with self._lock:
            self.vars[name] = value
        logger.debug("define %s in env %#x", name, id(self))

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k in mapping:
            if not isinstance(k, Symbol):
                raise LispTypeError(f"Cannot define {k} as a symbol")
        with self._lock:
            self.vars.update(mapping)

    def find(self, name: Symbol) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds `name`."""
        for env in self._frames():
            with env._lock:
                if name in env.vars:
                    return env
        return None

    def is_bound(self, name: Symbol) -> bool:
        return self.find(name) is not None

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name` here or in an ancestor.

        Raises LispUnboundSymbolError if no frame in the chain binds it.
        """
        for env in self._frames():
            with env._lock:
                if name in env.vars:
                    return env.vars[name]
        raise LispUnboundSymbolError(f"Cannot lookup unbound symbol {name}", symbol=name)

    def set(self, name: Symbol, value: LispValue) -> None:
        """Update the existing binding for `name` in the frame that owns it.

        Raises LispUnboundSymbolError if no frame in the chain binds it.
        """
        for env in self._frames():
            with env._lock:
                if name in env.vars:
                    env.vars[name] = value
                    logger.debug("set %s in env %#x", name, id(env))
                    return
        raise LispUnboundSymbolError(f"Cannot set unbound symbol {name}", symbol=name)

    def local_bindings(self) -> dict[Symbol, LispValue]:
        """Return a copy of the bindings of this frame only."""
        with self._lock:
            return dict(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variable names into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(str(k) for k in self.local_bindings()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            for env in self._frames():
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
