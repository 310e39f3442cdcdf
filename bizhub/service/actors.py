from bizhub.models import Client


def actor_summary(client):
    return {"id": client.id, "name": client.name, "email": client.email, "profile_image": client.profile_image}


def load_actors(store, client_ids):
    """Resolve many client ids with a single query; returns ``{id: summary}``."""
    if not client_ids:
        return {}
    clients = store.find(Client, Client.id.in_(list(client_ids)))
    return {client.id: actor_summary(client) for client in clients}
