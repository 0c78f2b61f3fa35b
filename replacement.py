"""
Page Replacement Engine
Implements FIFO, LRU, Optimal and Clock replacement over a fixed set of frames
"""

from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Union

# Called once per reference with (page, fault, resident pages in slot order)
EmitFn = Callable[[int, bool, List[int]], None]

FORWARD = 1
BACKWARD = -1

class UnknownPolicyError(ValueError):
    """Raised when a policy name does not match any replacement algorithm"""

    def __init__(self, name: str):
        super().__init__(f"Replacement policy '{name}' not found")
        self.name = name

class FrameSet:
    """Fixed-capacity ordered set of resident pages"""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Frame capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self.slots: List[int] = []

    @property
    def occupied(self) -> int:
        """Number of frames currently holding a page"""
        return len(self.slots)

    def is_full(self) -> bool:
        """True once every frame holds a page"""
        return len(self.slots) >= self.capacity

    def contains(self, page: int) -> bool:
        """Linear search for a resident page"""
        for resident in self.slots:
            if resident == page:
                return True
        return False

    def slot_of(self, page: int) -> Optional[int]:
        """Return the slot holding page, None if not resident"""
        for i, resident in enumerate(self.slots):
            if resident == page:
                return i
        return None

    def insert_at_or_append(self, slot: int, page: int) -> int:
        """
        Append page while there is free capacity, otherwise overwrite slot.
        Returns the slot that now holds page.
        """
        if not self.is_full():
            self.slots.append(page)
            return len(self.slots) - 1

        if not 0 <= slot < self.capacity:
            raise IndexError(f"Slot {slot} out of range for {self.capacity} frames")
        self.slots[slot] = page
        return slot

    def snapshot(self) -> List[int]:
        """Copy of the resident pages in slot order"""
        return list(self.slots)

    def __contains__(self, page: int) -> bool:
        return self.contains(page)

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[int]:
        return iter(self.slots)

    def __repr__(self):
        return f"FrameSet(capacity={self.capacity}, slots={self.slots})"

def farthest_reference(pages: Sequence[int], frames: FrameSet,
                       current_index: int, direction: int) -> int:
    """
    Pick the slot whose page is referenced farthest from current_index.

    FORWARD looks at references after current_index (Optimal), BACKWARD at
    references before it (LRU). A resident page with no reference in that
    direction is returned immediately. Ties go to the lowest slot.
    """
    if direction == FORWARD:
        positions = range(current_index + 1, len(pages))
    elif direction == BACKWARD:
        positions = range(current_index - 1, -1, -1)
    else:
        raise ValueError(f"Unknown scan direction: {direction}")

    victim_slot = 0
    farthest = 0
    for slot, resident in enumerate(frames):
        distance = None
        for j in positions:
            if pages[j] == resident:
                distance = abs(j - current_index)
                break

        if distance is None:
            return slot
        if distance > farthest:
            farthest = distance
            victim_slot = slot

    return victim_slot

class ClockHand:
    """Circular pointer with one reference bit per frame slot"""

    def __init__(self, size: int):
        self.size = size
        self.bits = [False] * size
        self.position = 0

    def mark(self, slot: int):
        """Set the reference bit of slot"""
        self.bits[slot] = True

    def advance(self):
        """Move the hand one slot forward, wrapping around"""
        self.position = (self.position + 1) % self.size

    def select_victim(self) -> int:
        """Give every referenced slot a second chance, return the first unreferenced one"""
        # Each step clears a set bit, so a full sweep always ends on a clear one
        while self.bits[self.position]:
            self.bits[self.position] = False
            self.advance()
        return self.position

    def __repr__(self):
        return f"ClockHand(position={self.position}, bits={self.bits})"

def _emit(emit: Optional[EmitFn], page: int, fault: bool, frames: FrameSet):
    if emit is not None:
        emit(page, fault, frames.snapshot())

def fifo(pages: Sequence[int], frames: FrameSet, emit: Optional[EmitFn] = None) -> int:
    """First-In-First-Out: overwrite the oldest slot, cycling through the frames"""
    oldest_index = 0
    page_faults = 0

    for page in pages:
        if frames.contains(page):
            _emit(emit, page, False, frames)
        elif not frames.is_full():
            # Filling free frames is not counted as a fault
            frames.insert_at_or_append(0, page)
            _emit(emit, page, False, frames)
        else:
            frames.insert_at_or_append(oldest_index, page)
            oldest_index = (oldest_index + 1) % frames.capacity
            page_faults += 1
            _emit(emit, page, True, frames)

    return page_faults

def lru(pages: Sequence[int], frames: FrameSet, emit: Optional[EmitFn] = None) -> int:
    """Least Recently Used: evict the page whose last reference is oldest"""
    page_faults = 0

    for i, page in enumerate(pages):
        if frames.contains(page):
            _emit(emit, page, False, frames)
        elif not frames.is_full():
            frames.insert_at_or_append(0, page)
            _emit(emit, page, False, frames)
        else:
            victim = farthest_reference(pages, frames, i, BACKWARD)
            frames.insert_at_or_append(victim, page)
            page_faults += 1
            _emit(emit, page, True, frames)

    return page_faults

def optimal(pages: Sequence[int], frames: FrameSet, emit: Optional[EmitFn] = None) -> int:
    """Optimal (Belady): evict the page whose next reference is farthest away"""
    page_faults = 0

    for i, page in enumerate(pages):
        if frames.contains(page):
            _emit(emit, page, False, frames)
        elif not frames.is_full():
            frames.insert_at_or_append(0, page)
            _emit(emit, page, False, frames)
        else:
            victim = farthest_reference(pages, frames, i, FORWARD)
            frames.insert_at_or_append(victim, page)
            page_faults += 1
            _emit(emit, page, True, frames)

    return page_faults

def clock(pages: Sequence[int], frames: FrameSet, emit: Optional[EmitFn] = None) -> int:
    """Clock (second chance): sweep the hand past referenced slots to find a victim"""
    hand = ClockHand(frames.capacity)
    page_faults = 0

    for page in pages:
        slot = frames.slot_of(page)
        if slot is not None:
            hand.mark(slot)
            _emit(emit, page, False, frames)
        elif not frames.is_full():
            slot = frames.insert_at_or_append(0, page)
            hand.mark(slot)
            _emit(emit, page, False, frames)
        else:
            victim = hand.select_victim()
            frames.insert_at_or_append(victim, page)
            hand.mark(victim)
            hand.advance()
            page_faults += 1
            _emit(emit, page, True, frames)

    return page_faults

class ReplacementPolicy(Enum):
    """Available page replacement algorithms"""
    FIFO = "FIFO"
    LRU = "LRU"
    OPTIMAL = "OPTIMAL"
    CLOCK = "CLOCK"

    @classmethod
    def parse(cls, name: str) -> "ReplacementPolicy":
        """Case-insensitive lookup by name"""
        key = name.strip().upper()
        if key not in cls.__members__:
            raise UnknownPolicyError(name)
        return cls[key]

    @property
    def driver(self) -> Callable[..., int]:
        return _DRIVERS[self]

_DRIVERS: Dict[ReplacementPolicy, Callable[..., int]] = {
    ReplacementPolicy.FIFO: fifo,
    ReplacementPolicy.LRU: lru,
    ReplacementPolicy.OPTIMAL: optimal,
    ReplacementPolicy.CLOCK: clock,
}

class TraceRow:
    """State of the frames right after one reference"""

    def __init__(self, page: int, fault: bool, frames: List[int]):
        self.page = page
        self.fault = fault
        self.frames = frames

    def __eq__(self, other):
        if not isinstance(other, TraceRow):
            return NotImplemented
        return (self.page, self.fault, self.frames) == (other.page, other.fault, other.frames)

    def __repr__(self):
        status = "FAULT" if self.fault else "HIT"
        return f"TraceRow(page={self.page}, {status}, frames={self.frames})"

class SimulationResult:
    """Outcome of replaying one reference string against one policy"""

    def __init__(self, policy: ReplacementPolicy, capacity: int, log: List[TraceRow],
                 page_faults: int):
        self.policy = policy
        self.capacity = capacity
        self.log = log
        self.page_faults = page_faults
        self.references = len(log)
        # Frames never shrink, so the final occupancy is the number of fills
        fills = len(log[-1].frames) if log else 0
        self.misses = page_faults + fills
        self.hits = self.references - self.misses

    @property
    def fault_rate(self) -> float:
        return self.page_faults / self.references if self.references > 0 else 0.0

    @property
    def miss_rate(self) -> float:
        return self.misses / self.references if self.references > 0 else 0.0

    def __repr__(self):
        return (f"SimulationResult(policy={self.policy.value}, capacity={self.capacity}, "
                f"page_faults={self.page_faults}, misses={self.misses})")

class PageReplacementSimulator:
    """Runs a replacement policy over a reference string from empty frames"""

    @staticmethod
    def run(policy: Union[ReplacementPolicy, str], pages: Sequence[int], capacity: int,
            emit: Optional[EmitFn] = None) -> SimulationResult:
        if not isinstance(policy, ReplacementPolicy):
            policy = ReplacementPolicy.parse(policy)

        frames = FrameSet(capacity)
        log: List[TraceRow] = []

        def record(page: int, fault: bool, snapshot: List[int]):
            log.append(TraceRow(page, fault, snapshot))
            if emit is not None:
                # The caller gets its own copy so the log cannot be rewritten
                emit(page, fault, list(snapshot))

        page_faults = policy.driver(list(pages), frames, record)
        return SimulationResult(policy, capacity, log, page_faults)
