"""
Memory consolidation engine: persistence handle, stores and the MemoryManager facade.
"""
