"""
Web Package - HTTP surface cua repo-flattener (FastAPI).

- app: create_app() wiring (templates, static, routers)
- routes: REST endpoints /api/process, /api/process_stream, /api/health
- path_guard: resolve va sandbox path tu request vao base directory
- schemas: Pydantic request/response models
"""
