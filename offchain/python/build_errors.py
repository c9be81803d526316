"""
Error types for the voter Merkle commitment builder.

Every fatal condition has its own exception so the command line can report
exactly which one stopped the run. Per-record problems are never raised;
they are collected as RejectionRecord entries instead.
"""


class MerkleBuildError(Exception):
    """Base class for conditions that abort a build before anything is written."""


class InputFileError(MerkleBuildError):
    """The input file is missing or could not be read."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Input file {reason}: {path}")


class EmptyInputError(MerkleBuildError):
    """The input contains no records after trimming and header removal."""

    def __init__(self, message="Input is empty"):
        super().__init__(message)


class NoValidAddressesError(MerkleBuildError):
    """Every record was rejected, so there is nothing to commit to."""

    def __init__(self, rejected_count):
        self.rejected_count = rejected_count
        super().__init__(
            f"No valid addresses found in input ({rejected_count} lines rejected)"
        )


class ProofVerificationError(MerkleBuildError):
    """A freshly generated proof does not fold back to the root.

    This points at an inconsistency between the tree builder and the
    verifier, never at bad input data.
    """

    def __init__(self, address, leaf, proof, root):
        self.address = address
        self.leaf = leaf
        self.proof = proof
        self.root = root
        super().__init__(
            f"Proof self-check failed for {address}: leaf 0x{leaf.hex()} "
            f"with {len(proof)} siblings does not reproduce root 0x{root.hex()}"
        )


class ArtifactFormatError(MerkleBuildError):
    """A previously written artifact could not be interpreted."""


class InvalidAddressError(ValueError):
    """Raised when a token cannot become a NormalizedIdentifier."""

    def __init__(self, token, reason="invalid address format"):
        self.token = token
        self.reason = reason
        super().__init__(f"{reason}: {token!r}")


class InputFormatError(MerkleBuildError):
    """Structured input (JSON) could not be decoded into records."""


class ArtifactWriteError(MerkleBuildError):
    """The output artifact could not be written."""

    def __init__(self, path, error):
        self.path = path
        self.error = error
        super().__init__(f"Could not write artifact to {path}: {error}")
