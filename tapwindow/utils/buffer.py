import numpy as np
import numpy.typing as npt


class WindowBuffer:
    """
    A fixed-size window of the last `capacity` feature vectors.
    The window is always full: it starts filled with zero vectors and every new
    vector evicts the oldest one. Storage is a preallocated ring buffer, so
    pushing never allocates.
    """

    def __init__(self, capacity: int, feature_count: int) -> None:
        assert capacity > 0
        assert feature_count > 0

        self.capacity = capacity
        self.feature_count = feature_count
        self._arena = np.zeros((capacity, feature_count), dtype=np.float32)
        self._head = 0
        " Index of the oldest vector, which is also the next slot to overwrite. "

        assert self._arena.size == capacity * feature_count

    def push(self, vector: npt.ArrayLike) -> None:
        """
        Add a vector to the window, evicting the oldest one.
        """
        self._arena[self._head] = vector
        self._head = (self._head + 1) % self.capacity

    def clear(self) -> None:
        """
        Restore the zero-filled window.
        """
        self._arena.fill(0.0)
        self._head = 0

    def snapshot(self) -> npt.NDArray[np.float32]:
        """
        Return a copy of the window as a (capacity, feature_count) array, oldest first.
        """
        return np.concatenate((self._arena[self._head:], self._arena[: self._head]))

    def flatten(self) -> npt.NDArray[np.float32]:
        """
        Return a copy of the window as a flat array of length capacity * feature_count,
        oldest vector first.
        """
        return self.snapshot().reshape(-1)

    def as_tensor(self) -> npt.NDArray[np.float32]:
        """
        Return a copy of the window with the classifier input shape (1, capacity, feature_count).
        """
        return self.snapshot().reshape(1, self.capacity, self.feature_count)

    def first(self) -> npt.NDArray[np.float32]:
        """
        Return a copy of the oldest vector in the window.
        """
        return self._arena[self._head].copy()

    def last(self) -> npt.NDArray[np.float32]:
        """
        Return a copy of the newest vector in the window.
        """
        return self._arena[self._head - 1].copy()

    def __len__(self) -> int:
        return self.capacity

    def __str__(self) -> str:
        return str(self.snapshot())

    def __repr__(self) -> str:
        return f"WindowBuffer(capacity={self.capacity}, feature_count={self.feature_count})"
