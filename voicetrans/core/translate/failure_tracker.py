"""
レート制限で失敗したプロバイダーの記録
"""

import threading
from typing import Dict, List


class FailureTracker:
    """利用不可とみなすプロバイダーの集合

    自動的な期限切れはない。成功時の clear() か reset_all() でのみ解除される。
    """

    def __init__(self):
        self._failed: Dict[str, None] = {}
        self._lock = threading.Lock()

    def mark_failed(self, identifier: str):
        with self._lock:
            self._failed[identifier] = None

    def clear(self, identifier: str):
        with self._lock:
            self._failed.pop(identifier, None)

    def reset_all(self):
        with self._lock:
            self._failed.clear()

    def contains(self, identifier: str) -> bool:
        with self._lock:
            return identifier in self._failed

    def failed_ids(self) -> List[str]:
        """登録順の識別子一覧"""
        with self._lock:
            return list(self._failed)

    def __contains__(self, identifier: str) -> bool:
        return self.contains(identifier)

    def __len__(self) -> int:
        with self._lock:
            return len(self._failed)
