"""Storage, frontmatter and id adapters for metanote."""
