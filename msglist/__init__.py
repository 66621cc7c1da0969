"""Message list search: query compilation and result assembly."""
