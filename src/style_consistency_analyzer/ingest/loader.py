"""Load writing samples from disk."""

from pathlib import Path

from bs4 import BeautifulSoup


def load_sample(path: Path) -> str:
    """
    Load a writing sample from file and return plain text.

    Supports:
    - .txt and .md files (read directly)
    - .html / .htm files (text extracted from the markup)
    """
    suffix = path.suffix.lower()

    if suffix in (".txt", ".md"):
        return load_txt(path)
    elif suffix in (".html", ".htm"):
        return load_html(path)
    else:
        raise ValueError(f"Unsupported file format: {suffix}")


def load_txt(path: Path) -> str:
    """Load a plain text file."""
    # Try common encodings
    for encoding in ["utf-8", "utf-8-sig", "latin-1", "cp1252"]:
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue

    raise ValueError(f"Could not decode {path} with any common encoding")


def load_html(path: Path) -> str:
    """Load an HTML document and keep its paragraph structure."""
    soup = BeautifulSoup(load_txt(path), "html.parser")

    # Remove script and style elements
    for element in soup(["script", "style"]):
        element.decompose()

    # Block elements become paragraphs
    text = soup.get_text(separator="\n")
    lines = [line.strip() for line in text.splitlines()]
    return "\n\n".join(line for line in lines if line)


def load_samples(directory: Path, pattern: str = "*.txt") -> list[tuple[str, str]]:
    """
    Load every sample in a directory matching ``pattern``.

    Returns (file name, text) pairs sorted by file name so that the baseline
    order is stable between runs.
    """
    files = sorted(p for p in directory.glob(pattern) if p.is_file())
    return [(p.name, load_sample(p)) for p in files]
