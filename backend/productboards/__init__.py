"""ProductBoards backend: product chat assistant, boards and price tracking."""
