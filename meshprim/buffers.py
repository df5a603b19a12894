import typing
import numpy as np
import meshprim

IntSequence = typing.Union[typing.Sequence[int], np.ndarray]
FloatSequence = typing.Union[typing.Sequence[float], np.ndarray]


def _as_int64(indices: IntSequence) -> np.ndarray:
    # int64 holds every uint32 and int32 value, so the final astype wraps
    # exactly like a two's complement truncation.
    return np.asarray(indices, dtype=np.int64).reshape(-1)


def byte_buffer_bytes(
    indices: typing.Union[bytes, bytearray, memoryview, IntSequence]
) -> bytes:
    if isinstance(indices, (bytes, bytearray, memoryview)):
        return bytes(indices)
    return np.asarray(indices).reshape(-1).astype("<u1").tobytes()


def int_buffer_bytes(indices: IntSequence) -> bytes:
    return _as_int64(indices).astype("<u4").tobytes()


def cast_to_short_bytes(indices: IntSequence) -> bytes:
    return _as_int64(indices).astype("<u2").tobytes()


def cast_to_byte_bytes(indices: IntSequence) -> bytes:
    return _as_int64(indices).astype("<u1").tobytes()


def short_buffer_bytes(indices: IntSequence) -> bytes:
    return np.asarray(indices).reshape(-1).astype("<u2").tobytes()


def float_buffer_bytes(data: FloatSequence) -> bytes:
    return np.asarray(data, dtype="<f4").reshape(-1).tobytes()


def cast_indices(indices: IntSequence, width: "meshprim.IndexWidth") -> bytes:
    return {
        meshprim.IndexWidth.UINT8: cast_to_byte_bytes,
        meshprim.IndexWidth.UINT16: cast_to_short_bytes,
        meshprim.IndexWidth.UINT32: int_buffer_bytes,
    }[width](indices)
