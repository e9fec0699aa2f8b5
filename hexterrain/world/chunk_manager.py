from __future__ import annotations

import queue
import threading
from typing import Dict, List, Tuple

from hexterrain.world.chunk import ChunkMesh


class ChunkWorker(threading.Thread):
    def __init__(
        self,
        task_q: "queue.Queue[tuple[int,int]]",
        out_q: "queue.Queue[tuple[tuple[int,int], ChunkMesh | BaseException]]",
        *,
        params,
        height_field,
    ) -> None:
        super().__init__(daemon=True)
        self.task_q = task_q
        self.out_q = out_q
        self.params = params
        self.height_field = height_field
        self._stop_event = threading.Event()

    def stop(self) -> None:
        self._stop_event.set()

    def run(self) -> None:
        from hexterrain.world.world import build_one

        while not self._stop_event.is_set():
            try:
                cx, cz = self.task_q.get(timeout=0.1)
            except queue.Empty:
                continue
            try:
                self.out_q.put(((cx, cz), build_one(self.params, self.height_field, cx, cz)))
            except Exception as e:
                # Handed back to the caller, which re-raises it.
                self.out_q.put(((cx, cz), e))
            finally:
                self.task_q.task_done()


class ChunkManager:
    """Builds chunks on a few worker threads.

    The height field is only read, so all workers share it.
    """

    def __init__(self, *, params, height_field, workers: int = 2) -> None:
        self.params = params
        self.height_field = height_field

        self.task_q: "queue.Queue[tuple[int,int]]" = queue.Queue()
        self.out_q: "queue.Queue[tuple[tuple[int,int], ChunkMesh | BaseException]]" = queue.Queue()

        self.workers = [
            ChunkWorker(self.task_q, self.out_q, params=params, height_field=height_field)
            for _ in range(max(1, int(workers)))
        ]
        for w in self.workers:
            w.start()

    def shutdown(self) -> None:
        for w in self.workers:
            w.stop()
        for w in self.workers:
            w.join(timeout=1.0)

    def build_all(self, coords: List[Tuple[int, int]]) -> List[ChunkMesh]:
        """Queue every chunk and wait for all of them; keeps ``coords`` order."""
        for key in coords:
            self.task_q.put(key)

        done: Dict[Tuple[int, int], ChunkMesh] = {}
        for _ in range(len(coords)):
            key, result = self.out_q.get()
            if isinstance(result, BaseException):
                raise result
            done[key] = result
        return [done[key] for key in coords]
