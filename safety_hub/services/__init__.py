"""
Services layer - business logic lives here, routes stay thin.

- local_store / session_store: persisted local state and who is signed in
- complaint_service / evidence_service: Firestore and Storage clients
- dashboard_service: view state behind the user and admin dashboards
"""
