# =============================================================================
# Record Parser
# =============================================================================
# Turns raw delimited text into account candidates plus per-line diagnostics.
#
# Input format (one account per line, blank lines ignored):
#
#     address----secret----client_id----refresh_token
#
# The separator is configurable. Fields beyond the fourth are ignored.
#
# This module does no I/O: the same function handles a pasted block, a
# selected file, or a dropped file. A bad line never stops the batch; it
# becomes a "<line-number>: <raw line>" diagnostic and parsing moves on.
# =============================================================================

from dataclasses import dataclass, field

from flaremail.core import AccountRecord, ValidationError


DEFAULT_SEPARATOR = "----"

# address, secret, client_id, refresh_token
FIELD_COUNT = 4


@dataclass
class ImportOutcome:
    """
    Aggregate result of an import batch.

    success_count + failed_count need not equal the number of input lines:
    blank lines are skipped without being counted.

    Attributes:
        success_count: Lines that produced (and, after persistence, saved) an account.
        failed_count: Lines that were rejected.
        failures: Diagnostics in input line order.
    """
    success_count: int = 0
    failed_count: int = 0
    failures: list[str] = field(default_factory=list)

    def add_failure(self, diagnostic: str) -> None:
        self.failed_count += 1
        self.failures.append(diagnostic)

    @property
    def ok(self) -> bool:
        return self.failed_count == 0

    def summary(self) -> str:
        """Human-readable result line(s) for the import notification."""
        if self.ok:
            return f"Imported {self.success_count} accounts"

        text = f"Succeeded: {self.success_count}, failed: {self.failed_count}"
        if self.failures:
            text += "\nFailed lines:\n" + "\n".join(self.failures)
        return text


@dataclass
class ParsedLine:
    """A valid import line and the account it describes."""
    line_number: int
    raw_line: str
    account: AccountRecord


@dataclass
class ParseResult:
    """
    Output of parse_batch().

    Attributes:
        outcome: Counts and diagnostics (success_count counts valid lines).
        lines: Valid lines in input order, ready to hand to the store.
        errors: The rejected lines, in input order.
    """
    outcome: ImportOutcome
    lines: list[ParsedLine] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def accounts(self) -> list[AccountRecord]:
        return [line.account for line in self.lines]


def parse_line(line_number: int, raw_line: str, separator: str) -> AccountRecord:
    """
    Parse one trimmed, non-empty line.

    Args:
        line_number: 1-based position of the line in the input.
        raw_line: The trimmed line.
        separator: Field separator token.

    Returns:
        The account described by the line.

    Raises:
        ValidationError: If the line has fewer than four non-empty fields
                         or the address has no '@'.
    """
    parts = raw_line.split(separator)
    if len(parts) < FIELD_COUNT:
        raise ValidationError(
            line_number, raw_line,
            f"expected {FIELD_COUNT} fields, got {len(parts)}",
        )

    address, secret, client_id, refresh_token = (p.strip() for p in parts[:FIELD_COUNT])
    if not (address and secret and client_id and refresh_token):
        raise ValidationError(line_number, raw_line, "empty field")

    if "@" not in address:
        raise ValidationError(line_number, raw_line, "address has no '@'")

    return AccountRecord(
        address=address,
        secret=secret,
        client_id=client_id,
        refresh_token=refresh_token,
    )


def parse_batch(raw_text: str, separator: str = DEFAULT_SEPARATOR) -> ParseResult:
    """
    Parse a block of import text.

    Args:
        raw_text: Pasted or file-read text, one account per line.
        separator: Field separator token (default "----").

    Returns:
        ParseResult with valid accounts and the outcome counts.

    Raises:
        ValueError: If the separator is empty.
    """
    if not separator:
        raise ValueError("Separator must not be empty")

    result = ParseResult(outcome=ImportOutcome())

    # Only "\n" ends a line; form feeds and other separators stay in the line
    for index, line in enumerate(raw_text.split("\n")):
        line = line.strip()
        if not line:
            continue

        line_number = index + 1
        try:
            account = parse_line(line_number, line, separator)
        except ValidationError as e:
            result.errors.append(e)
            result.outcome.add_failure(e.diagnostic)
            continue

        result.lines.append(ParsedLine(line_number, line, account))
        result.outcome.success_count += 1

    return result
