import re

from references import ReferenceList, parse_citation

# Sheet column keys, in the Google list-feed "gsx$" form.
NUMBER_COLUMN = "gsx$no."
TITLE_COLUMN = "gsx$pericope"
SECTION_COLUMN = "gsx$section"

# Processing order is fixed; the "all" list depends on it.
BOOK_COLUMNS = [
    ("Matthew", "gsx$matthew"),
    ("Mark", "gsx$mark"),
    ("Luke", "gsx$luke"),
    ("John", "gsx$john"),
]

PARENTHESIZED = re.compile(r'\(.')


def normalize_title(title, variant="parenthetical"):
    """
    Capitalizes each word. The "parenthetical" variant also upper-cases
    the first letter after an opening parenthesis, e.g. "foo(bar" -> "Foo(Bar".
    """
    title = " ".join(word.capitalize() for word in title.split())
    if variant == "parenthetical":
        title = PARENTHESIZED.sub(lambda m: m.group(0).upper(), title, count=1)
    return title


def cell(record, column):
    return record[column]["$t"]


class Pericope:
    def __init__(self, record, title_variant="parenthetical"):
        self.number = cell(record, NUMBER_COLUMN)
        self.title = normalize_title(cell(record, TITLE_COLUMN), title_variant)
        self.section = cell(record, SECTION_COLUMN)
        self.references = ReferenceList()

        for book, column in BOOK_COLUMNS:
            parse_citation(cell(record, column).strip(), book, self.references)

    @property
    def essential_references(self):
        return self.references.essential

    @property
    def additional_references(self):
        return self.references.additional

    @property
    def all_references(self):
        return self.references.all

    def __repr__(self):
        return f"<Pericope {self.number}. {self.title} ({len(self.references)} refs)>"
