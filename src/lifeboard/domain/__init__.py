"""Pure domain core: model, reconciliation stages and dashboard classifier."""
