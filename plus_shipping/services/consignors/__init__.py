"""
Consignor services: factory, deployment orchestrator and use cases.
"""
