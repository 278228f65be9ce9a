r"""Access gate for a single view of a share.

One ``AccessGate`` is created per visit. It resolves the share, decides
whether the visitor may see it (public share, bypass token, stored grant)
and otherwise waits for a manually entered code:

    UNKNOWN -> CHECKING -> UNLOCKED
                       \-> LOCKED -> LOCKED (wrong code)
                                  \-> UNLOCKED (right code, grant written)

UNLOCKED is terminal. The grant store is passed in by the caller.
"""
import enum
import itertools
import logging
from . import bypass
from .grants import grant_key
from ..errors import DecodeError, GateError, InvalidAccessCode

log = logging.getLogger(__name__)

INVALID_CODE_MESSAGE = 'Invalid access code. Please try again.'

_tickets = itertools.count(1)


class GateState(str, enum.Enum):
    UNKNOWN = 'unknown'
    CHECKING = 'checking'
    LOCKED = 'locked'
    UNLOCKED = 'unlocked'


class AccessGate:
    def __init__(self, share_link_id: str, grants, codec=bypass):
        self.share_link_id = share_link_id
        self.grants = grants
        self.codec = codec
        self.record = None
        self.state = GateState.UNKNOWN
        self.history = [GateState.UNKNOWN]
        self.prompts = 0
        self.entered = ''
        self.error = None
        self._ticket = None
        self._cancelled = False

    @property
    def unlocked(self) -> bool:
        return self.state is GateState.UNLOCKED

    def _move(self, state):
        self.state = state
        self.history.append(state)

    def begin(self) -> int:
        """Enter CHECKING and hand out the ticket the resolved record must come back with."""
        if self._cancelled:
            raise GateError('gate was cancelled')
        if self.state not in (GateState.UNKNOWN, GateState.CHECKING):
            raise GateError(f'cannot re-check a gate that is {self.state.value}')
        self._ticket = next(_tickets)
        self._move(GateState.CHECKING)
        return self._ticket

    def cancel(self):
        """Tear the view down; results still in flight are dropped."""
        self._cancelled = True
        self._ticket = None

    def complete(self, ticket: int, record, token: str | None = None):
        if (self._cancelled or ticket is None or ticket != self._ticket
                or self.state is not GateState.CHECKING):
            log.debug("dropping stale result for %s (ticket %s)", self.share_link_id, ticket)
            return None
        self._ticket = None
        self.record = record
        if self._check(record, token):
            self._move(GateState.UNLOCKED)
        else:
            self._move(GateState.LOCKED)
            self.prompts += 1
        log.info("share %s %s", self.share_link_id, self.state.value)
        return self.state

    def open(self, resolver, token: str | None = None):
        """Resolve the share and run the check. NotFound/LoadFailure propagate."""
        if self.state is GateState.UNLOCKED:
            return self.state
        ticket = self.begin()
        try:
            record = resolver.resolve(self.share_link_id)
        except Exception:
            self._ticket = None
            raise
        return self.complete(ticket, record, token)

    def _check(self, record, token) -> bool:
        code = record.access_code
        if not code:
            return True
        if token:
            try:
                if self.codec.decode(token) == code:
                    return True
            except DecodeError as e:
                log.debug("ignoring bypass token for %s: %s", self.share_link_id, e)
        return self.grants.get(grant_key(self.share_link_id)) == code

    def submit(self, entered: str):
        """Check a manually entered code; raises InvalidAccessCode and stays LOCKED on mismatch."""
        if self.state is GateState.UNLOCKED:
            return self.state
        if self.state is not GateState.LOCKED:
            raise GateError(f'cannot submit a code while {self.state.value}')
        code = self.record.access_code
        self.entered = entered or ''
        if self.entered.strip().casefold() != code.casefold():
            self.entered = ''
            self.error = INVALID_CODE_MESSAGE
            self._move(GateState.LOCKED)
            self.prompts += 1
            log.info("share %s: invalid access code", self.share_link_id)
            raise InvalidAccessCode(INVALID_CODE_MESSAGE)
        self.grants.set(grant_key(self.share_link_id), code)
        self.error = None
        self.entered = ''
        self._move(GateState.UNLOCKED)
        log.info("share %s unlocked by code entry", self.share_link_id)
        return self.state
