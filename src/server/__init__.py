"""HTTP and WebSocket surface for the LiftSim controller."""
