from urllib.parse import quote

from slugify import slugify

from config import SEARCH_URL

# Reserved and unreserved URI characters stay as they are in reference links.
URI_SAFE = ";/?:@&=+$,[]!*'()"

TOC_JUMP = '<span class="toc-jump">[&and;](#{anchor} "Go to the Table of Contents")</span>'


def entry_anchor(entry):
    return f"entry-{entry.number}"


def entry_toc_anchor(entry):
    return f"entry-{entry.number}-toc"


def section_anchor(section):
    return f"section-{slugify(section)}"


def section_toc_anchor(section):
    return f"section-{slugify(section)}-toc"


def group_by_section(entries):
    """
    Yields (section, entry) pairs where `section` is set only on the first
    entry of each consecutive run sharing a section name, else None.
    """
    current_section = ""
    for entry in entries:
        if entry.section != current_section:
            current_section = entry.section
            yield entry.section, entry
        else:
            yield None, entry


def render_header():
    return (
        "# A Harmony of the Gospel\n\n"
        "Derived from _Synopsis Quattuor Evangeliorum_ by **Kurt Aland**.\n"
    )


def render_toc(entries):
    lines = ['\n<div id="table-of-contents" markdown="1">\n\n', '## <a name="toc"></a>Table of Contents\n\n']
    for section, entry in group_by_section(entries):
        if section is not None:
            lines.append(f'+ <a name="{section_toc_anchor(section)}"></a>[{section}](#{section_anchor(section)})\n')
        lines.append(f'    + <a name="{entry_toc_anchor(entry)}"></a>[{entry.number}. {entry.title}](#{entry_anchor(entry)})\n')
    lines.append('\n</div>\n')
    return "".join(lines)


class ReportRenderer:
    """Renders pericopes as markdown, embedding text from `fetch_passage(reference)`."""

    def __init__(self, fetch_passage, search_url=SEARCH_URL):
        self.fetch_passage = fetch_passage
        self.search_url = search_url

    def link(self, reference):
        return self.search_url + quote(reference, safe=URI_SAFE)

    def reference_line(self, label, references, kind):
        if not references:
            return f"\n    {label}"
        links = ";".join(
            f' [{ref}]({self.link(ref)} "Read {ref} on esvbible.org")' for ref in references
        )
        line = f"\n    {label}:{links}"
        if len(references) > 1:
            line += f' &mdash; [All]({self.link("; ".join(references))} "Read {kind} verses on esvbible.org")'
        return line

    def render_entry(self, entry):
        essential = entry.essential_references
        additional = entry.additional_references

        output = f'\n+ #### <a name="{entry_anchor(entry)}"></a>{entry.number}. {entry.title} {TOC_JUMP.format(anchor=entry_toc_anchor(entry))}'
        output += '\n\n    <p class="entry-references" markdown="1">'

        if essential and additional:
            output += self.reference_line("Essential Verses", essential, "essential") + "  "
        if additional:
            output += self.reference_line("Additional Verses", additional, "additional") + "  "
        output += self.reference_line("All Verses" if additional else "Verses", entry.all_references, "all")
        output += "\n    </p>"

        output += '\n\n    <div class="entry-verses">'
        for reference in entry.all_references:
            output += f"\n\n    <h5>{reference}</h5>"
            output += f"\n{self.fetch_passage(reference)}"
        output += "\n\n    </div>"

        return output

    def render_entries(self, entries):
        parts = ['\n<div id="gospel-synopsis" markdown="1">\n\n', "## Gospel Synopsis\n"]
        for section, entry in group_by_section(entries):
            if section is not None:
                jump = TOC_JUMP.format(anchor=section_toc_anchor(section))
                parts.append(f'\n### <a name="{section_anchor(section)}"></a>{section} {jump}\n')
            parts.append(self.render_entry(entry) + "\n")
        parts.append("\n</div>\n")
        return "".join(parts)

    def render(self, entries):
        return render_header() + render_toc(entries) + self.render_entries(entries)
