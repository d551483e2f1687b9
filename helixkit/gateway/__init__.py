"""Request routing, a worker thread pool and a listening connection handler."""