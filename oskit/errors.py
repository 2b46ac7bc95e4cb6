"""Error codes of the block file system and the exception that carries them."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes reported by the file system."""

    EBADCURS = -1
    EBADDBN = -2
    EBADFBN = -3
    EBADINUM = -4
    EBADREAD = -5
    EBADWHENCE = -6
    EBADWRITE = -7
    EBIGFNAME = -8
    EBIGNUMB = -9
    EDIRFULL = -10
    EDISKCREATE = -11
    EDISKFULL = -12
    EEXISTS = -13
    EFNF = -14
    ENEGNUMB = -15
    ENODBN = -16
    ENODISK = -17
    ENOMEM = -18
    ENULLPTR = -19
    ENYI = -20
    EOFTFULL = -21


_MESSAGES = {
    ErrorCode.EBADDBN: "Bad DBN: negative or too large",
    ErrorCode.EBADFBN: "Bad FBN: negative or too large",
    ErrorCode.EBADINUM: "Bad Inum: negative or too large",
    ErrorCode.EBADCURS: "Bad cursor within file",
    ErrorCode.EBADREAD: "Error reading from BFS disk",
    ErrorCode.EBADWRITE: "Error writing to BFS disk",
    ErrorCode.EBIGFNAME: "Filename too big",
    ErrorCode.EBIGNUMB: "Read or write is too big",
    ErrorCode.EDIRFULL: "Directory is already full",
    ErrorCode.EDISKCREATE: "Failure creating BFS disk",
    ErrorCode.EDISKFULL: "Disk is full",
    ErrorCode.EEXISTS: "Format would destroy current disk",
    ErrorCode.EFNF: "File Not Found",
    ErrorCode.ENEGNUMB: "Negative # bytes in read or write",
    ErrorCode.ENODBN: "No DBN yet allocated - non-fatal",
    ErrorCode.ENODISK: "Cannot open the BFS disk",
    ErrorCode.ENOMEM: "Failure to malloc memory",
    ErrorCode.ENULLPTR: "About to deref a null pointer",
    ErrorCode.ENYI: "Function Not Yet Implemented",
    ErrorCode.EOFTFULL: "OpenFileTable is full",
    ErrorCode.EBADWHENCE: "Invalid 'whence' in fsSeek",
}

_MISCELLANEOUS = "Miscellaneous error"


def describe(code: int) -> str:
    """Return the message for an error code; unknown codes are miscellaneous."""
    try:
        return _MESSAGES[ErrorCode(code)]
    except ValueError:
        return _MISCELLANEOUS


class BfsError(Exception):
    """A file system failure, identified by its error code."""

    def __init__(self, code: int, detail: str | None = None):
        try:
            self.code: ErrorCode | int = ErrorCode(code)
        except ValueError:
            self.code = code
        self.detail = detail
        message = describe(code)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)