"""
Outbound SMS dispatch and the conversation log.
"""
