"""Application layer: naming rules that turn partial identifiers into variants."""
