"""Infrastructure layer: host layer stacks and style document I/O."""
