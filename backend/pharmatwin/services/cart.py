# backend/pharmatwin/services/cart.py
import logging
import threading
import time
from collections import OrderedDict
from typing import Callable, Dict, List, Optional

from pharmatwin import config
from pharmatwin.schemas import MedicineRecord, CartLine, CartView
from pharmatwin.services.interactions import check_interactions

log = logging.getLogger("cart")


class CartLineNotFound(LookupError):
    pass


class Cart:
    """Lines keyed by medicine id, kept in the order they were first added."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        self._lines: Dict[str, CartLine] = {}
        # sync routes run in a threadpool
        self._lock = threading.RLock()

    @property
    def lines(self) -> List[CartLine]:
        with self._lock:
            return list(self._lines.values())

    @property
    def total(self) -> float:
        with self._lock:
            return round(sum(line.medicine.price * line.quantity for line in self._lines.values()), 2)

    @property
    def item_count(self) -> int:
        with self._lock:
            return sum(line.quantity for line in self._lines.values())

    def _line(self, medicine_id: str) -> CartLine:
        try:
            return self._lines[medicine_id]
        except KeyError:
            raise CartLineNotFound(f"Medicine {medicine_id} is not in the cart")

    def add(self, med: MedicineRecord) -> CartLine:
        with self._lock:
            line = self._lines.get(med.id)
            if line:
                line.quantity += 1
            else:
                line = CartLine(medicine=med, quantity=1)
                self._lines[med.id] = line
            return line

    def adjust(self, medicine_id: str, delta: int) -> CartLine:
        # never drops below 1; removal is explicit
        with self._lock:
            line = self._line(medicine_id)
            line.quantity = max(1, line.quantity + delta)
            return line

    def increment(self, medicine_id: str) -> CartLine:
        return self.adjust(medicine_id, 1)

    def decrement(self, medicine_id: str) -> CartLine:
        return self.adjust(medicine_id, -1)

    def set_quantity(self, medicine_id: str, quantity: int) -> CartLine:
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        with self._lock:
            line = self._line(medicine_id)
            line.quantity = quantity
            return line

    def remove(self, medicine_id: str) -> None:
        with self._lock:
            self._line(medicine_id)
            del self._lines[medicine_id]

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()

    def view(self, lang: str = "en") -> CartView:
        with self._lock:
            lines = [line.model_copy() for line in self._lines.values()]
            total = self.total
            item_count = self.item_count
        return CartView(
            session_id=self.session_id,
            lines=lines,
            total=total,
            item_count=item_count,
            interactions=check_interactions([line.medicine for line in lines], lang),
        )


def empty_view(session_id: str, lang: str = "en") -> CartView:
    return Cart(session_id).view(lang)


class CartStore:
    """
    In-memory carts, one per UI session.

    Sessions idle for longer than ``idle_ttl`` seconds are dropped, and when
    more than ``max_sessions`` are open the least recently used one goes.
    """

    def __init__(self, max_sessions: int = 1000, idle_ttl: float = 3600.0,
                 clock: Callable[[], float] = time.monotonic):
        self.max_sessions = max_sessions
        self.idle_ttl = idle_ttl
        self._clock = clock
        self._carts: "OrderedDict[str, Cart]" = OrderedDict()
        self._touched: Dict[str, float] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._carts)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._carts

    def _evict(self, now: float) -> None:
        for sid in [s for s, t in self._touched.items() if now - t > self.idle_ttl]:
            del self._carts[sid]
            del self._touched[sid]
            log.info("Dropped idle cart %s", sid)
        while len(self._carts) > self.max_sessions:
            sid, _ = self._carts.popitem(last=False)
            del self._touched[sid]
            log.info("Dropped cart %s (session limit %d)", sid, self.max_sessions)

    def get(self, session_id: str) -> Optional[Cart]:
        with self._lock:
            now = self._clock()
            self._evict(now)
            cart = self._carts.get(session_id)
            if cart is not None:
                self._carts.move_to_end(session_id)
                self._touched[session_id] = now
            return cart

    def get_or_create(self, session_id: str) -> Cart:
        with self._lock:
            now = self._clock()
            cart = self._carts.get(session_id)
            if cart is None:
                cart = Cart(session_id)
                self._carts[session_id] = cart
            self._carts.move_to_end(session_id)
            self._touched[session_id] = now
            self._evict(now)
            return cart

    def clear(self) -> None:
        with self._lock:
            self._carts.clear()
            self._touched.clear()


carts = CartStore(max_sessions=config.CART_MAX_SESSIONS, idle_ttl=config.CART_IDLE_TTL)


def get_or_create_cart(session_id: str) -> Cart:
    return carts.get_or_create(session_id)


def find_cart(session_id: str) -> Optional[Cart]:
    return carts.get(session_id)
