"""End-to-end harness for the messaging web client"""
