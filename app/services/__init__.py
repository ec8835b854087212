"""Domain services: access resolution, aggregation and CRUD operations"""
