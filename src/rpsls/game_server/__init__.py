"""HTTP game server and game subsystem."""
