from ticketdesk.layout import go_to, guard
from ticketdesk.routes import MASTER_PATH, master_landing_path

auth = guard(MASTER_PATH, with_sidebar=False)
go_to(master_landing_path(auth.user))
