from polysurrogate.serialization.serializer import Serializer, normalize_path, FORMAT_VERSION

__all__ = ["Serializer", "normalize_path", "FORMAT_VERSION"]
