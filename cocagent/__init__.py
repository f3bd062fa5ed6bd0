"""coc-agent: AI code completion for coc.nvim."""
