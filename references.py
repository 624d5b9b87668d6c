from dataclasses import dataclass, field
from typing import List

# Cross-reference to Paul's account of the Last Supper; never book-prefixed.
FOREIGN_BOOK_MARKER = "1 Cor."
ESSENTIAL_MARKER = "*"


@dataclass
class ReferenceList:
    essential: List[str] = field(default_factory=list)
    additional: List[str] = field(default_factory=list)
    all: List[str] = field(default_factory=list)

    def add(self, reference, essential):
        self.all.append(reference)
        if essential:
            self.essential.append(reference)
        else:
            self.additional.append(reference)

    def __len__(self):
        return len(self.all)


def split_tokens(cell):
    """
    Splits a citation cell on ';' the way the sheet was authored.
    Trailing empty tokens are dropped; tokens are trimmed only when
    there is more than one of them.
    """
    tokens = cell.split(';')
    while tokens and tokens[-1] == "":
        tokens.pop()
    if len(tokens) > 1:
        tokens = [t.strip() for t in tokens]
    return tokens


def parse_citation(cell, book, references=None):
    """
    Parses one citation cell for one book into essential/additional
    references, appending to `references` when given.
    """
    if references is None:
        references = ReferenceList()

    if cell.startswith(FOREIGN_BOOK_MARKER):
        references.add(cell, essential=True)
        return references

    for token in split_tokens(cell):
        if ESSENTIAL_MARKER in token:
            # The marker is always the last character in the sheet.
            references.add(f"{book} {token[:-1]}", essential=True)
        else:
            references.add(f"{book} {token}", essential=False)

    return references
