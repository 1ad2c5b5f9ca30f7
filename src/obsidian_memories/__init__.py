"""Memories for Obsidian — journal suggestions to Markdown notes.

Pipeline:
    records ──► extractor (per record) ──► aggregator (across records)
            ──► composer ──► Markdown with YAML frontmatter

    manual note ──► composer.compose_manual ──► Markdown

Weather comes from an injected `WeatherLookup`; configuration comes from
`memories.toml` + environment (see `obsidian_memories.config`).
"""

__version__ = "0.1.0"
