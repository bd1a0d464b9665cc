"""Money Coach - LLM conversation with caller-executed tool calls.

Answering a question takes one or two HTTP round-trips:
- POST /assistant builds the conversation and asks the LLM. A plain answer
  is returned directly; a tool request is handed back to the caller together
  with the ids needed to resume.
- POST /finalize-tool-output forwards the caller's tool result to the LLM,
  addressed by those ids.

No conversation state is kept on the server between the two calls.
"""
