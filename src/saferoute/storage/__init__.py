"""Key-value storage backends the fleet document is persisted through."""
