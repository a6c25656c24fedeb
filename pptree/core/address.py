"""
Address scheme for positions inside a program tree.

An address is a plain string:
    root                  -> "-1"
    child i of the root   -> "i"
    child i of address A  -> A + "i"

So the second child of the first child of the root is "01". There is no
separator between digits, which is why a child index must stay in 0..9:
with wider nodes "1" + "10" and "11" + "0" would name the same slot.
"""

ROOT = "-1"
MAX_CHILDREN = 10


def is_root(address: str) -> bool:
    return address == ROOT


def child_address(parent: str, index: int) -> str:
    """Address of child slot `index` under `parent`."""
    if not parent:
        raise ValueError("Parent address cannot be None or empty")
    if index < 0 or index >= MAX_CHILDREN:
        raise ValueError(
            f"Child index must be in [0, {MAX_CHILDREN - 1}]: {index}"
        )
    prefix = "" if is_root(parent) else parent
    return prefix + str(index)


def parent_address(address: str) -> str:
    """Inverse of child_address. The root has no parent."""
    if not address:
        raise ValueError("Node address cannot be None or empty")
    if is_root(address):
        raise ValueError("The root address has no parent")
    if len(address) == 1:
        return ROOT
    return address[:-1]


def depth_of(address: str) -> int:
    """Root is depth 0, its children depth 1, and so on."""
    if not address:
        raise ValueError("Node address cannot be None or empty")
    return 0 if is_root(address) else len(address)


def path_of(address: str) -> tuple:
    """Child indexes from the root down to `address`."""
    if not address:
        raise ValueError("Node address cannot be None or empty")
    if is_root(address):
        return ()
    return tuple(int(c) for c in address)


def address_of(path) -> str:
    """Address for a root-to-node path of child indexes."""
    address = ROOT
    for index in path:
        address = child_address(address, index)
    return address
