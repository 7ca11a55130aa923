"""JNI native method symbol mangling."""

from __future__ import annotations


def mangle(component: str) -> str:
    """Escape a class or method name the way the JVM looks up native symbols."""
    out = []
    for char in component:
        if char in "./":
            out.append("_")
        elif char == "_":
            out.append("_1")
        elif char == ";":
            out.append("_2")
        elif char == "[":
            out.append("_3")
        elif char.isascii() and char.isalnum():
            out.append(char)
        else:
            # The JVM escapes UTF-16 code units, so astral characters become surrogate pairs.
            encoded = char.encode("utf-16-be")
            for offset in range(0, len(encoded), 2):
                unit = int.from_bytes(encoded[offset : offset + 2], "big")
                out.append(f"_0{unit:04x}")
    return "".join(out)


def native_symbol(class_name: str, method: str) -> str:
    """Return ``Java_<class>_<method>`` for a fully qualified class name."""
    return f"Java_{mangle(class_name)}_{mangle(method)}"


__all__ = ["mangle", "native_symbol"]
