"""Content Sanitizer - Filtro de conteudo antes da geracao de questoes.

Remove HTML/script potencialmente perigoso preservando blocos de codigo e
formatacao markdown.
"""

import re

DANGEROUS_PATTERNS = [
    re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE),
    re.compile(r"<iframe\b[^<]*(?:(?!</iframe>)<[^<]*)*</iframe>", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"data:text/html", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),  # onclick=, onerror=, ...
]

SUSPICIOUS_PATTERNS = [
    (re.compile(r"<script", re.IGNORECASE), "script tags"),
    (re.compile(r"eval\s*\(", re.IGNORECASE), "eval calls"),
    (re.compile(r"document\.cookie", re.IGNORECASE), "cookie access"),
]

MAX_SUSPICIOUS_OCCURRENCES = 5

_EXCESS_NEWLINES = re.compile(r"\n{4,}")


def sanitize_content(content: str) -> str:
    """Remove padroes perigosos e colapsa 4+ quebras de linha em 3."""
    sanitized = content
    for pattern in DANGEROUS_PATTERNS:
        sanitized = pattern.sub("", sanitized)

    sanitized = _EXCESS_NEWLINES.sub("\n\n\n", sanitized)
    return sanitized.strip()


def validate_content(content: str) -> str | None:
    """Retorna mensagem de erro se o conteudo parecer malicioso, senao None."""
    for pattern, name in SUSPICIOUS_PATTERNS:
        matches = pattern.findall(content)
        if len(matches) > MAX_SUSPICIOUS_OCCURRENCES:
            return f"Content contains suspicious {name} ({len(matches)} occurrences)"
    return None
