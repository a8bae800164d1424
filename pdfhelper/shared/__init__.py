"""Cross-cutting helpers: errors, logging, ids."""
