""" A minimal parodus client service. Registers as the 'echo' service,
    waits for the relay to authorize it, and answers every RETRIEVE request
    addressed to it by sending the request payload back to the source.

    Run alongside a parodus instance on the default ports:

        python echo.py --name echo
"""

import argparse
import logging

import paroduscl
from paroduscl import wrp


class Handlers(paroduscl.Handlers):

    def __init__(self):
        self.session = None


    def retrieve(self, msg):

        response = wrp.Retrieve(
            source=msg.dest,
            dest=msg.source,
            transaction_uuid=msg.transaction_uuid,
            content_type=msg.content_type,
            payload=msg.payload,
            status=200,
        )

        try:
            return self.session.send(response)
        except paroduscl.errors.AuthorizationError:
            logging.warning('dropped retrieve %s, not yet authorized', msg.transaction_uuid)
            return paroduscl.Result.ERROR_SOCK_SEND_AUTH


    def alive(self):
        logging.debug('parodus says hello')


# end of class Handlers



def main():

    parser = argparse.ArgumentParser(description='Echo RETRIEVE payloads back to their source.')
    parser.add_argument('--name', default='echo', help='service name to register')
    parser.add_argument('--parodus', default=None, help='relay address, for example tcp://127.0.0.1:6666')
    parser.add_argument('--client', default=None, help='local address to bind, for example tcp://127.0.0.1:6668')
    parser.add_argument('--verbose', action='store_true')
    arguments = parser.parse_args()

    level = logging.DEBUG if arguments.verbose else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s %(name)s %(levelname)s %(message)s')

    handlers = Handlers()
    params = paroduscl.Params(service_name=arguments.name, url_parodus=arguments.parodus, url_client=arguments.client, handlers=handlers)

    with paroduscl.init(params) as session:
        handlers.session = session

        while True:
            try:
                result = session.recv()
            except paroduscl.errors.ReceiveError as error:
                logging.warning('%s', error)
                continue

            if paroduscl.result.is_expected(result):
                continue

            if result != paroduscl.Result.SUCCESS:
                logging.warning('handler returned %s', paroduscl.result_str(result))


if __name__ == '__main__':
    main()

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
