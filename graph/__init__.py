"""LangGraph scoring pipeline: chains, nodes, orchestration and the scoring client."""
