"""
Event Logger Module

Records every lab operation as a typed event in a tamper-evident log.
Each record is chained to the previous one by SHA-256, so editing or
dropping an earlier record breaks verification.

Events:
- Key generation
- Encryption / decryption
- Cryptanalysis start / finish

Private exponents and plaintext are never written to the log; plaintext
is recorded only as a short SHA-256 fingerprint.
"""

import time
import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Callable

from cryptography.hazmat.primitives import hashes


# ============================================================================
# Constants
# ============================================================================

EVENT_VERSION = "1.0"
GENESIS_DIGEST = "00" * 32


# ============================================================================
# Hashing
# ============================================================================

def sha256_hex(data: bytes) -> str:
    """Hex SHA-256 digest of data."""
    digest = hashes.Hash(hashes.SHA256())
    digest.update(data)
    return digest.finalize().hex()


def fingerprint(text: str) -> str:
    """First 16 hex characters of the SHA-256 of text."""
    return sha256_hex(text.encode())[:16]


def chain_digest(prev_digest: str, record: str) -> str:
    """Digest linking a record to its predecessor."""
    return sha256_hex(bytes.fromhex(prev_digest) + record.encode())


# ============================================================================
# Event Types
# ============================================================================

class EventType(Enum):
    """Types of lab events that can be logged."""
    SESSION_START = "session_start"
    KEYS_GENERATED = "keys_generated"
    MESSAGE_ENCRYPTED = "message_encrypted"
    MESSAGE_DECRYPTED = "message_decrypted"
    ANALYSIS_STARTED = "analysis_started"
    ANALYSIS_FINISHED = "analysis_finished"


# ============================================================================
# Event Structure
# ============================================================================

@dataclass
class LabEvent:
    """A single logged lab event."""
    event_type: EventType
    timestamp: int  # Unix timestamp
    details: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> str:
        """Serialize the event as a compact JSON record."""
        return json.dumps({
            'version': EVENT_VERSION,
            'type': self.event_type.value,
            'time': self.timestamp,
            'iso_time': datetime.fromtimestamp(self.timestamp).isoformat(),
            'details': self.details,
        }, separators=(',', ':'), sort_keys=True)

    @classmethod
    def from_record(cls, record: str) -> 'LabEvent':
        data = json.loads(record)
        return cls(
            event_type=EventType(data['type']),
            timestamp=data['time'],
            details=data.get('details', {}),
        )

    def __str__(self) -> str:
        dt = datetime.fromtimestamp(self.timestamp)
        return f"[{dt.strftime('%Y-%m-%d %H:%M:%S')}] {self.event_type.value}"


@dataclass(frozen=True)
class LogEntry:
    """A serialized event plus its chain digest."""
    record: str
    digest: str


# ============================================================================
# Event Logger
# ============================================================================

class EventLogger:
    """
    Hash-chained event log for a lab session.

    Callbacks registered with add_callback() are invoked with each new
    event after it has been appended.
    """

    def __init__(self, entries: Optional[List[LogEntry]] = None, log_start: bool = True):
        """
        Initialize the event logger.

        Args:
            entries: Existing chained entries (used by import_log)
            log_start: Record a SESSION_START event on creation
        """
        self._entries: List[LogEntry] = list(entries or [])
        self._callbacks: List[Callable[[LabEvent], None]] = []

        if log_start:
            self.log(EventType.SESSION_START, node='rsalab')

    @property
    def head_digest(self) -> str:
        return self._entries[-1].digest if self._entries else GENESIS_DIGEST

    def __len__(self) -> int:
        return len(self._entries)

    def log(self, event_type: EventType, **details: Any) -> LabEvent:
        """Append an event and notify callbacks."""
        event = LabEvent(
            event_type=event_type,
            timestamp=int(time.time()),
            details=details,
        )
        record = event.to_record()
        self._entries.append(LogEntry(record, chain_digest(self.head_digest, record)))

        for callback in self._callbacks:
            try:
                callback(event)
            except Exception:
                pass  # A failing listener must not undo the logged operation
        return event

    def add_callback(self, callback: Callable[[LabEvent], None]) -> None:
        """Add a callback to be notified of new events."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[LabEvent], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    # ========================================================================
    # Lab Events
    # ========================================================================

    def log_keys_generated(self, e: int, n: int, min_prime: int, max_prime: int) -> LabEvent:
        """Log a new key pair. Only the public key is recorded."""
        return self.log(
            EventType.KEYS_GENERATED,
            e=e, n=n, prime_range=[min_prime, max_prime],
        )

    def log_encrypt(self, plaintext: str, token_count: int, e: int, n: int) -> LabEvent:
        return self.log(
            EventType.MESSAGE_ENCRYPTED,
            msg_id=fingerprint(plaintext), tokens=token_count, e=e, n=n,
        )

    def log_decrypt(self, plaintext: str, token_count: int, n: int) -> LabEvent:
        return self.log(
            EventType.MESSAGE_DECRYPTED,
            msg_id=fingerprint(plaintext), tokens=token_count, n=n,
        )

    def log_analysis_started(self, method: str, token_count: int, e: int, n: int) -> LabEvent:
        return self.log(
            EventType.ANALYSIS_STARTED,
            method=method, tokens=token_count, e=e, n=n,
        )

    def log_analysis_finished(
        self,
        method: str,
        found: bool,
        mse: float,
        attempts: int,
        stop_reason: str,
        elapsed_ms: float
    ) -> LabEvent:
        """
        Log the outcome of a search.

        An infinite MSE (nothing found) is stored as null so the record
        stays valid JSON.
        """
        return self.log(
            EventType.ANALYSIS_FINISHED,
            method=method,
            found=found,
            mse=mse if found else None,
            attempts=attempts,
            stop=stop_reason,
            elapsed_ms=round(elapsed_ms, 3),
        )

    # ========================================================================
    # Retrieval
    # ========================================================================

    def get_all_events(self) -> List[LabEvent]:
        return [LabEvent.from_record(entry.record) for entry in self._entries]

    def get_events_by_type(self, event_type: EventType) -> List[LabEvent]:
        """Get all events of a specific type."""
        return [e for e in self.get_all_events() if e.event_type == event_type]

    def get_recent_events(self, count: int = 10) -> List[LabEvent]:
        """Get the most recent events."""
        return self.get_all_events()[-count:]

    def verify_integrity(self) -> bool:
        """Recompute the digest chain and compare it with the stored digests."""
        digest = GENESIS_DIGEST
        for entry in self._entries:
            digest = chain_digest(digest, entry.record)
            if digest != entry.digest:
                return False
        return True

    def print_log(self, last_n: Optional[int] = None) -> None:
        """Print the event log in a readable format."""
        events = self.get_all_events()
        if last_n:
            events = events[-last_n:]

        print("\n" + "=" * 70)
        print("LAB EVENT LOG")
        print("=" * 70)

        for event in events:
            print(event)
            for k, v in event.details.items():
                print(f"    {k}: {v}")

        print("=" * 70)
        print(f"Total events: {len(self._entries)}")
        print(f"Chain head: {self.head_digest[:16]}...")
        print("=" * 70)

    def export_log(self) -> str:
        """Export the log as JSON."""
        return json.dumps([
            {'record': entry.record, 'digest': entry.digest}
            for entry in self._entries
        ], indent=2)

    @classmethod
    def import_log(cls, json_str: str) -> 'EventLogger':
        """
        Import a log exported with export_log().

        Raises:
            ValueError: If the chain does not verify
        """
        entries = [LogEntry(item['record'], item['digest']) for item in json.loads(json_str)]
        logger = cls(entries=entries, log_start=False)
        if not logger.verify_integrity():
            raise ValueError("Event log failed integrity verification")
        return logger
